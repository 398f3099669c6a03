from .sample import Accepted, ParseResult, RejectReason, Rejected, Sample
from .series import EMPTY_SERIES, Series, SeriesOrderError, append
from .state_store import ConnectionState, DashboardState, StateStore
