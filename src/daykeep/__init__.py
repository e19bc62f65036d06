# SPDX-License-Identifier: MIT

from daykeep.initialize import initialize
from daykeep.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
