import sys

from amqp_common.config.config import _cli_main

if __name__ == "__main__":
    sys.exit(_cli_main())
