import sys

from learnpath.cli import main

sys.exit(main())
