"""SSH_ASKPASS helper that answers ssh's passphrase prompt."""

import os
import sys

from git_repo_keeper.config import PASSPHRASE_ENV_VAR


def main() -> int:
    """Print the passphrase handed over by the fetcher."""
    passphrase = os.environ.get(PASSPHRASE_ENV_VAR)
    if not passphrase:
        return 1
    sys.stdout.write(passphrase + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
