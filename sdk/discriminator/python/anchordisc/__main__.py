import sys

from anchordisc.cli import main

sys.exit(main())
