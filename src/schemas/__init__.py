from .user import *
from .fund import *
from .portfolio import *
from .health import HealthCheckResponse
