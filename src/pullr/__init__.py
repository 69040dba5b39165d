"""pullr.

Open, preflight and manage pull requests on a GitHub-compatible forge from
the command line, with defaults read from the local git repository:
- branch name and last commit subject
- remote owner/repo
- stored forge credentials
"""

__version__ = "0.1.0"

from pullr.orchestrator.config import PullrSettings

__all__ = ["__version__", "PullrSettings"]
