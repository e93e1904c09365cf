import sys

from libhtpasswd.cli import main

sys.exit(main())
