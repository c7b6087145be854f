"""
RSA backend selection for Satispay Python SDK

Backends are probed in registration order and the first one reporting
availability is instantiated once and cached for the life of the process.
"""

import logging
import threading
from typing import List, Optional, Sequence, Type

from ..exceptions import NoBackendAvailableError
from .rsa_service import RSAService
from .rsa_cryptography import CryptographyRSAService

logger = logging.getLogger(__name__)


def select_backend(candidates: Sequence[Type[RSAService]]) -> Optional[RSAService]:
    """
    Pick the first available backend from an ordered list of candidates.

    Args:
        candidates: Backend classes in preference order

    Returns:
        RSAService instance, or None if no candidate is available
    """
    for backend_cls in candidates:
        try:
            backend = backend_cls()
            available = backend.is_available()
        except Exception as e:
            logger.debug(f"RSA backend '{backend_cls.__name__}' failed its availability probe, skipping: {e}")
            continue

        if available:
            return backend
        logger.debug(f"RSA backend '{backend.name}' not available, skipping")
    return None


class RSAServiceFactory:
    """
    Lazily resolved, cached RSA backend.
    """

    _backends: List[Type[RSAService]] = [CryptographyRSAService]
    _instance: Optional[RSAService] = None
    _lock = threading.Lock()

    @classmethod
    def get(cls) -> RSAService:
        """
        Get the active RSA backend, resolving it on first use.

        Returns:
            RSAService: The cached backend instance

        Raises:
            NoBackendAvailableError: If no registered backend is available
        """
        if cls._instance is not None:
            return cls._instance

        with cls._lock:
            if cls._instance is None:
                backend = select_backend(cls._backends)
                if backend is None:
                    raise NoBackendAvailableError(
                        "No RSA backend available - install with: pip install cryptography",
                        "NO_BACKEND_AVAILABLE",
                        {"candidates": [b.__name__ for b in cls._backends]}
                    )
                logger.debug(f"Selected RSA backend '{backend.name}'")
                cls._instance = backend
            return cls._instance

    @classmethod
    def register_backend(cls, backend_cls: Type[RSAService], prefer: bool = False) -> None:
        """
        Register an additional backend class.

        Args:
            backend_cls: RSAService subclass to register
            prefer: Put the backend ahead of the already registered ones

        Raises:
            TypeError: If backend_cls is not an RSAService subclass
        """
        if not (isinstance(backend_cls, type) and issubclass(backend_cls, RSAService)):
            raise TypeError("Backend must be a subclass of RSAService")

        with cls._lock:
            backends = [b for b in cls._backends if b is not backend_cls]
            if prefer:
                backends.insert(0, backend_cls)
            else:
                backends.append(backend_cls)
            cls._backends = backends
            cls._instance = None

    @classmethod
    def backends(cls) -> List[Type[RSAService]]:
        """Registered backend classes in preference order"""
        return list(cls._backends)

    @classmethod
    def reset(cls) -> None:
        """Drop the cached backend and restore the default registry"""
        with cls._lock:
            cls._backends = [CryptographyRSAService]
            cls._instance = None


def get_rsa_service() -> RSAService:
    """Shortcut for RSAServiceFactory.get()"""
    return RSAServiceFactory.get()
