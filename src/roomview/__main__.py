import sys

from roomview.app import main

sys.exit(main())
