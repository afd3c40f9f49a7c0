import sys

from debox.pipeline import main

sys.exit(main())
