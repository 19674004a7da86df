import sys

from chatlist.cli import main

sys.exit(main())
