"""
Pydantic models for the relay endpoints.
"""
import json
from typing import Any, Dict, Union
from pydantic import BaseModel


class StreamRequest(BaseModel):
    """Relay a chat request to an upstream provider"""
    provider: str
    payload: Union[Dict[str, Any], str]  # JSON object or its string encoding

    def parsed_payload(self) -> Dict[str, Any]:
        """Return the payload as a dict

        Raises:
            ValueError: the payload string is not a JSON object
        """
        if isinstance(self.payload, dict):
            return self.payload
        body = json.loads(self.payload)
        if not isinstance(body, dict):
            raise ValueError("payload must be a JSON object")
        return body
