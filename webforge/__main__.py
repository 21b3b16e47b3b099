import sys

from webforge.cli import main

sys.exit(main())
