from urlshortener.models.url_record import UrlRecord


__all__ = ['UrlRecord']
