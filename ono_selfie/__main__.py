import sys

from ono_selfie.api.cli import main

sys.exit(main())
