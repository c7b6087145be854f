"""
Exception classes for Satispay Python SDK
"""

from typing import Optional, Dict, Any


class SatispaySDKError(Exception):
    """Base exception for all Satispay SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class KeyGenerationError(SatispaySDKError):
    """Exception raised when an RSA key pair cannot be produced"""
    pass


class SigningError(SatispaySDKError):
    """Exception raised when a request or message cannot be signed"""
    pass


class NoBackendAvailableError(SatispaySDKError):
    """Exception raised when no RSA backend reports availability"""
    pass


class ValidationError(SatispaySDKError):
    """Exception raised for validation failures"""
    pass


class ConfigurationError(SatispaySDKError):
    """Exception raised for invalid SDK configuration"""
    pass


class ServerCommunicationError(SatispaySDKError):
    """Exception raised for server communication errors"""
    
    def __init__(self, message: str, error_code: str = "SERVER_ERROR", 
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status


class ApiError(ServerCommunicationError):
    """Exception raised when the Satispay API answers with a non-2xx status"""
    
    def __init__(self, message: str, http_status: int, code: Optional[str] = None,
                 request_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "API_ERROR", http_status, details)
        self.code = code
        self.request_id = request_id
