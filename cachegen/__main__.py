import sys

from .generate_wrappers import main

sys.exit(main())
