import sys

from ci_testgrid.cli import main

sys.exit(main())
