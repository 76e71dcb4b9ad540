import sys

from v2swap.commands.swap import main

sys.exit(main())
