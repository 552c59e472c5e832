import sys

from cep_lookup.cli import main

sys.exit(main())
