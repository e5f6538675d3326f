import sys

from jobfinder.cli import main

sys.exit(main())
