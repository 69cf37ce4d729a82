import sys

from deckpdf.cli import main

sys.exit(main())
