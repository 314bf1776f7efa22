import sys

from search_keys.cli import main


sys.exit(main())
