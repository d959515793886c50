from .client import NewsClient, NewsAPIError, NewsAPIConnectionError

__all__ = ['NewsClient', 'NewsAPIError', 'NewsAPIConnectionError']
