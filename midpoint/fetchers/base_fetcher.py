import requests


class BaseFetcher:
    """JSON-over-HTTP GET with a per-fetcher timeout."""

    def __init__(self, timeout: float = 10):
        self.timeout = timeout

    def get(self, url, params=None, headers=None):
        response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
