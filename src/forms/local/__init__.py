"""City income tax returns, attached to the state return of their state."""

from forms.local import local_registry  # noqa: F401
from forms.local import detroit, nyc, philadelphia  # noqa: F401
