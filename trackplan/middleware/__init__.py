"""HTTP middleware: timeout and request ID.

Applied in main app; order matters (last added = outermost).
"""

from trackplan.middleware.request_id import RequestIDMiddleware
from trackplan.middleware.timeout import TimeoutMiddleware

__all__ = ["RequestIDMiddleware", "TimeoutMiddleware"]
