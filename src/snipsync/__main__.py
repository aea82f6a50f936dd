import sys

from snipsync.cli import main

sys.exit(main())
