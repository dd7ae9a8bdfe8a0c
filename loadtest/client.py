import requests

from passgen.errors import HistoryItemNotFound


class RetryableError(Exception):
    """Transport failure or unavailable storage; the request can be retried."""


class ValidationFailed(Exception):
    def __init__(self, error, detail=None):
        super().__init__(detail or error)
        self.error = error
        self.detail = detail


class PassgenClient:
    def __init__(self, base_url="http://127.0.0.1:5000", timeout=10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _request(self, method, path, **kwargs):
        try:
            response = self.session.request(
                method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise RetryableError(str(e)) from e

        if response.status_code >= 500:
            error = self._error_body(response).get("error", "unavailable")
            raise RetryableError(f"{response.status_code} {error}")
        if response.status_code == 400:
            data = self._error_body(response)
            raise ValidationFailed(data.get("error", "bad_request"), data.get("detail"))

        response.raise_for_status()
        return response.json()

    @staticmethod
    def _error_body(response):
        # Proxies and crashing servers answer with HTML or nothing at all
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def generate(self, length=None, options=None):
        """
        Request a new password.

        Args:
            length: password length, server default when None
            options: dict of upper/lower/numbers/symbols flags

        Raises:
            ValidationFailed: empty pool or length out of range
            RetryableError: server unreachable or storage down
        """
        payload = {}
        if length is not None:
            payload["length"] = length
        if options is not None:
            payload["options"] = options
        return self._request("POST", "/api/generate", json=payload)

    def history(self, limit=None):
        params = {"limit": limit} if limit is not None else None
        return self._request("GET", "/api/history", params=params)["items"]

    def stats(self):
        return self._request("GET", "/api/stats")

    def delete(self, item_id):
        try:
            return self._request("DELETE", f"/api/history/{item_id}")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise HistoryItemNotFound(item_id) from e
            raise

    def clear(self):
        return self._request("DELETE", "/api/history")
