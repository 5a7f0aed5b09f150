import sys

from krimdown.cli import main

sys.exit(main())
