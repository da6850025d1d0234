"""reportview: build report and log status viewer.

Fetches the latest build report and its raw log over HTTP and renders their
load state in the terminal:
  - Trigger-driven fetches, one generation per request, latest wins
  - Closed error taxonomy (network / decode / not requested yet)
  - Clock-injected time and duration formatting with clock-skew detection
  - Rich page with a live mode, Typer CLI, env-driven config
"""

__version__ = "0.1.0"
__description__ = "Build report and log status viewer"

from reportview.core.resource import RemoteResource
from reportview.core.trigger import TriggerCell
from reportview.core.viewer import StatusViewer

__all__ = ["RemoteResource", "TriggerCell", "StatusViewer", "__version__"]
