from typing import Any, Dict, Optional


class SMHIError(Exception):
    """Failure while talking to the SMHI Open Data API"""

    def __init__(self, message: str, status_code: Optional[int] = None, endpoint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "statusCode": self.status_code, "endpoint": self.endpoint}


class ToolNotFoundError(LookupError):
    """Requested tool is not in the catalog"""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name
