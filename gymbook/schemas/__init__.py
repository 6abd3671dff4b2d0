from .common import CamelModel, ApiResponse
