import sys

from json_assert.cli import main

sys.exit(main())
