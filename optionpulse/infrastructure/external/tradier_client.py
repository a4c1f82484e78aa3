"""
OptionPulse – Tradier REST Client
====================================
Transporte HTTP async hacia la API de Tradier (aiohttp).

- Sesión aiohttp única y perezosa, con header Bearer + Accept JSON.
- Timeout total por request (ClientTimeout); el core no tiene timeouts.
- Traduce TODO fallo a ProviderError:
    401 / 403          → AuthenticationError
    otro status >= 400 → ProviderError (con mensaje extraído del payload)
    red / timeout      → ProviderError sin status_code
    JSON inválido      → ProviderError

El token nunca se loguea.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from optionpulse.application.ports.errors import AuthenticationError, ProviderError
from optionpulse.shared.logging.logger import get_logger

logger = get_logger("tradier_client")


class TradierClient:
    """Cliente REST mínimo: GET con query params, POST form-encoded."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout_seconds: float = 10.0,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None
        self._requests = 0
        self._failures = 0

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Accept": "application/json",
        }

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self.headers, timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Cierra la sesión si fue creada por este cliente."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("POST", endpoint, data=data)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{endpoint}"
        session = self._get_session()
        self._requests += 1

        try:
            async with session.request(
                method,
                url,
                params=params,
                data=data,
                headers=self.headers,
                timeout=self._timeout,
            ) as response:
                payload = await self._read_payload(response)
                if response.status >= 400:
                    self._raise_for_status(response.status, payload, endpoint)
                return payload
        except ProviderError:
            self._failures += 1
            raise
        except asyncio.TimeoutError as e:
            self._failures += 1
            raise ProviderError(f"Timeout en {method} {endpoint}") from e
        except aiohttp.ClientError as e:
            self._failures += 1
            raise ProviderError(f"Error de red en {method} {endpoint}: {e}") from e

    @staticmethod
    async def _read_payload(response: aiohttp.ClientResponse) -> Dict[str, Any]:
        text = await response.text()
        if not text.strip():
            return {}
        try:
            payload = json.loads(text)
        except ValueError as e:
            if response.status >= 400:
                return {"message": text.strip()[:200]}
            raise ProviderError(
                f"Respuesta no JSON de Tradier: {text[:120]!r}",
                status_code=response.status,
            ) from e
        if not isinstance(payload, dict):
            return {"data": payload}
        return payload

    @staticmethod
    def _raise_for_status(status: int, payload: Dict[str, Any], endpoint: str) -> None:
        message = TradierClient._extract_error(payload) or f"HTTP {status}"
        logger.debug("Tradier %s respondió %d: %s", endpoint, status, message)
        if status in (401, 403):
            raise AuthenticationError(
                f"Tradier rechazó credenciales: {message}",
                status_code=status,
                payload=payload,
            )
        raise ProviderError(
            f"Tradier API error: {message}",
            status_code=status,
            payload=payload,
        )

    @staticmethod
    def _extract_error(payload: Dict[str, Any]) -> Optional[str]:
        """Tradier usa varios formatos de error según el endpoint."""
        if not payload:
            return None
        fault = payload.get("fault")
        if isinstance(fault, dict) and fault.get("faultstring"):
            return str(fault["faultstring"])
        errors = payload.get("errors")
        if isinstance(errors, dict):
            error = errors.get("error")
            if isinstance(error, list):
                return "; ".join(str(e) for e in error)
            if error:
                return str(error)
        if payload.get("message"):
            return str(payload["message"])
        return None

    def to_dict(self) -> dict:
        return {
            "base_url": self._base_url,
            "requests": self._requests,
            "failures": self._failures,
        }
