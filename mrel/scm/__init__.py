"""Source-control layer.

- ScmProviderInitialization / ScmProviderInitializationBuilder: credentials
  and working directory handed to a provider once
- ScmProvider: the backend contract
- GitScmProvider: git command line implementation
"""

from mrel.scm.git import GitScmProvider
from mrel.scm.initialization import ScmProviderInitialization, ScmProviderInitializationBuilder
from mrel.scm.provider import ScmError, ScmProvider, ScmStatus

__all__ = [
    "GitScmProvider",
    "ScmError",
    "ScmProvider",
    "ScmProviderInitialization",
    "ScmProviderInitializationBuilder",
    "ScmStatus",
]
