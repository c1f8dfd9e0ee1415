import sys

from inbox_triage.cli import main

sys.exit(main())
