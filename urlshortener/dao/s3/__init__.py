from urlshortener.dao.s3.url_record_s3_dao import UrlRecordS3DAO


__all__ = ['UrlRecordS3DAO']
