"""Data Access Object (DAO) implementation for managing URL records in S3

Each record is a JSON object named after its shortcode:

    s3://<bucket>/<prefix>/<shortcode>.json   {"originalUrl": "...", "expirationTime": 1767225600}

S3 has no atomic counter, so shortcodes are random and collisions are
detected by a conditional PUT (`If-None-Match: *`).

NOTE: expired objects are not removed by the DAO. Configure a bucket
lifecycle rule to clean them up.

Classes:
    UrlRecordS3DAO:
        DAO for storing and retrieving UrlRecord in an S3 bucket.

Example:
    >>> dao = UrlRecordS3DAO(bucket='url-shortener-storage', prefix='urlshortener:dev')
    >>> shortcode = dao.next_shortcode()
    >>> dao.insert(shortcode, UrlRecord('https://example.com/page', 1767225600))
    <UrlRecordS3DAO>
    >>> dao.get(shortcode).expiration_time
    1767225600
"""

import os

import boto3
from beartype import beartype
from botocore.exceptions import ClientError

from urlshortener.types import S3Client
from urlshortener.models import UrlRecord
from urlshortener.constants import ENV, Shortcode
from urlshortener.exceptions import ValidationError
from urlshortener.dao.base import UrlRecordBaseDAO
from urlshortener.dao.s3.helpers import handle_s3_errors, error_code
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, DataStoreError
from urlshortener.utils.runtime import running_locally
from urlshortener.utils.shortener import random_shortcode


NOT_FOUND_CODES = frozenset({'NoSuchKey', '404'})
ALREADY_EXISTS_CODES = frozenset({'PreconditionFailed', 'ConditionalRequestConflict', '412'})


class UrlRecordS3DAO(UrlRecordBaseDAO):
    """S3-based Data Access Object (DAO) for managing URL records

    Attributes:
        s3 (S3Client):
            boto3 S3 client.
        bucket (str):
            Name of the bucket holding the records.
        prefix (str | None):
            Key prefix namespacing all record objects, e.g. 'app:env'.

    All methods raise DataStoreError on S3 errors other than the ones they document.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str | None = None,
        region: str | None = None,
        s3_client: S3Client | None = None,
    ):
        if not isinstance(bucket, str) or not bucket:
            raise ValueError(f'Bucket must be a non-empty string (given value: {bucket!r}).')

        if s3_client is None:
            # LocalStack stands in for S3 when running under SAM
            endpoint_url = os.getenv(ENV.LocalStack.ENDPOINT) if running_locally() else None
            s3_client = boto3.client('s3', region_name=region, endpoint_url=endpoint_url)

        self.s3 = s3_client
        self.bucket = bucket
        self.prefix = prefix

    def object_key(self, shortcode: str) -> str:
        key = f'{shortcode}.json'
        return f'{self.prefix}/{key}' if self.prefix is not None else key

    @handle_s3_errors
    @beartype
    def insert(self, shortcode: str, record: UrlRecord, **kwargs) -> 'UrlRecordS3DAO':
        """Store a URL record as a JSON object, refusing to overwrite an existing one

        Raises:
            ShortURLAlreadyExistsError:
                If an object for the shortcode already exists.
            DataStoreError:
                On any other S3 error.
        """
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=self.object_key(shortcode),
                Body=record.to_json().encode('utf-8'),
                ContentType='application/json',
                IfNoneMatch='*',
            )
        except ClientError as e:
            if error_code(e) in ALREADY_EXISTS_CODES:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.") from e
            raise
        return self

    @handle_s3_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> UrlRecord:
        """Retrieve a URL record by shortcode (it may already be expired)

        Raises:
            ShortURLNotFoundError:
                If no object exists for the shortcode.
            DataStoreError:
                If the object is corrupted or on any other S3 error.
        """
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=self.object_key(shortcode))
        except ClientError as e:
            if error_code(e) in NOT_FOUND_CODES:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from e
            raise

        try:
            return UrlRecord.from_json(response['Body'].read())
        except ValidationError as e:
            raise DataStoreError(f"Short URL with code '{shortcode}' holds a corrupted record.") from e

    def next_shortcode(self, **kwargs) -> str:
        return random_shortcode(length=Shortcode.RANDOM_LENGTH)
