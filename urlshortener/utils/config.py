"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile (typically
`backend-config`) and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "create_url": {
                "redis": {"host": "...", "port": 6379, "db": 0, "shortcode_salt": "..."},
                "s3": {"bucket": "url-shortener-storage"}
            },
            "redirect_url": {
                "redis": { ... },
                "s3": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"create_url"`) of the active backend.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), `'local'` by default.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig. In SAM,
        load configuration from a local AppConfig agent.

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.config import load_config
        >>> config = load_config('create_url')
        >>> print(config['redis']['host'])
        redis.host.docker.internal
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from pathlib import Path
from collections.abc import Callable

import boto3

from urlshortener.constants import ENV
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.helpers import require_environment
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)

LOCAL_APPCONFIG_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal'})
LOCAL_APPCONFIG_PORTS = frozenset({2772, None})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME' (None if not set)"""
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads the PROJECT_ROOT environment variable, falling back to this file's directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.path.dirname(__file__)))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def select_backend(config: dict, lambda_name: str) -> dict:
    """Extract the active backend's section for a Lambda from the AppConfig document

    Raises:
        BadConfigurationError:
            If the document lacks the active backend or the Lambda's section.
    """
    try:
        backend = config['active_backend']
        return {backend: config['configs'][lambda_name][backend]}
    except (KeyError, TypeError) as e:
        raise BadConfigurationError(f"AppConfig document has no active backend section for '{lambda_name}'.") from e


def validate_appconfig_agent_url(url: str | None) -> str:
    """Ensure the local AppConfig agent URL points at a local host

    Returns:
        str: the URL, or an empty string if no URL is configured.

    Raises:
        ValueError: If scheme, host or port are not those of a local agent.
    """
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise ValueError(f'Bad scheme {url}')
    if components.hostname not in LOCAL_APPCONFIG_HOSTS:
        raise ValueError(f'Bad host {url}')
    if components.port not in LOCAL_APPCONFIG_PORTS:
        raise ValueError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     – Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  – Optional profile name (default: "backend-config").
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        agent_url = validate_appconfig_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            config = json.load(r)

        data = select_backend(config, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'create_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "create_url" or "redirect_url").

    Returns:
        dict: {<active backend>: <lambda's backend config>}

    Raises:
        MissingEnvironmentVariableError:
            If any of the AppConfig identifiers is not set.
        BadConfigurationError:
            If the AppConfig document lacks the Lambda's section.
        botocore.exceptions.ClientError:
            If AppConfig rejects the request.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    data = select_backend(config, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
