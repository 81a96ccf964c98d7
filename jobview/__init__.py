"""jobview: permission-gated job collection views.

A view is a named subset of build-producing items.  From any view the
package derives, on demand and without caching:

  - the contributor activity index ("People"): one record per user with
    the job and time of their most recent change
  - the "all builds" and "failed builds" syndication feeds
  - a composite name search index over the view and its items

Item creation through a view is gated by the view's ACL.
"""

__version__ = "0.1.0"
__description__ = "Permission-gated job views with contributor activity and build feeds"

from jobview.core.acl import AuthorizationError
from jobview.core.view import AllView, ItemValidationError, ListView, View

__all__ = [
    "View",
    "AllView",
    "ListView",
    "AuthorizationError",
    "ItemValidationError",
    "__version__",
]
