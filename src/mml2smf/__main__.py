import sys

from mml2smf.cli import main

sys.exit(main())
