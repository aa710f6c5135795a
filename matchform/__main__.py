import sys

from matchform.cli import main

sys.exit(main())
