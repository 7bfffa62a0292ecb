"""Tests for error handling"""
import json
import pytest
from unittest.mock import Mock, patch
from fastapi import HTTPException
from fastapi.responses import JSONResponse

from user_events.core.errors import (
    DeserializationFailure,
    ErrorResponse,
    InvalidArgument,
    TransportFailure,
    error_response_handler,
    http_exception_handler,
)


class TestErrorResponse:
    """Test ErrorResponse exception classes"""

    def test_error_response_creation(self):
        """Test creating an ErrorResponse"""
        error = ErrorResponse("Something went wrong", status_code=400)
        assert error.message == "Something went wrong"
        assert error.status_code == 400
        assert error.details == {}

    def test_error_response_default_status_code(self):
        """Test that ErrorResponse defaults to status code 400"""
        assert ErrorResponse("Bad request").status_code == 400

    def test_invalid_argument(self):
        """Test that InvalidArgument names the offending field"""
        error = InvalidArgument("userId")

        assert error.field == "userId"
        assert error.status_code == 400
        assert error.details == {"field": "userId"}
        assert str(error) == "userId cannot be null or empty"

    def test_invalid_argument_custom_message(self):
        """Test overriding the InvalidArgument message"""
        assert str(InvalidArgument("timestamp", "timestamp must be a datetime")) == "timestamp must be a datetime"

    def test_status_codes(self):
        """Test the status code of each failure kind"""
        assert DeserializationFailure("bad payload").status_code == 422
        assert TransportFailure("broker down").status_code == 503

    def test_failures_are_error_responses(self):
        """Test that all failures are handled by the ErrorResponse handler"""
        for error in (InvalidArgument("userId"), DeserializationFailure("x"), TransportFailure("y")):
            assert isinstance(error, ErrorResponse)


class TestErrorHandlers:
    """Test error handler functions"""

    @pytest.mark.asyncio
    async def test_error_response_handler(self):
        """Test error_response_handler function"""
        mock_request = Mock()
        error = InvalidArgument("eventType")

        with patch('user_events.core.errors.logger') as mock_logger:
            response = await error_response_handler(mock_request, error)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 400
        assert json.loads(response.body) == {
            "error": "eventType cannot be null or empty",
            "details": {"field": "eventType"},
        }
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_error_response_handler_no_details(self):
        """Test error_response_handler with no details"""
        mock_request = Mock()
        error = TransportFailure("Kafka unavailable")

        with patch('user_events.core.errors.logger'):
            response = await error_response_handler(mock_request, error)

        assert response.status_code == 503
        assert json.loads(response.body)["details"] == {}

    @pytest.mark.asyncio
    async def test_http_exception_handler(self):
        """Test http_exception_handler function"""
        mock_request = Mock()
        exception = HTTPException(status_code=404, detail="Not Found")

        with patch('user_events.core.errors.logger') as mock_logger:
            response = await http_exception_handler(mock_request, exception)

        assert response.status_code == 404
        assert json.loads(response.body) == {"error": "Not Found"}
        mock_logger.error.assert_called_once()
