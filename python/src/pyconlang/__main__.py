import sys

from pyconlang._cli import main


sys.exit(main())
