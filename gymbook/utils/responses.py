from typing import Any

from gymbook.schemas.common import ApiResponse


def success_response(data: Any = None, message: str = "Operation successful") -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)
