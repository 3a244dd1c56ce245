import sys

from ywkv.main import main

sys.exit(main())
