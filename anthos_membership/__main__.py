import sys

from anthos_membership.cli import main

sys.exit(main())
