import sys

from ensure_update.main import main

sys.exit(main())
