import sys

from bitperm.cli import main

sys.exit(main())
