import sys

from shadersync.main import main

sys.exit(main())
