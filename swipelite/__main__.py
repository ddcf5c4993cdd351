import sys

from swipelite.cli import main

sys.exit(main())
