import click


class KubectlOpenstackError(click.ClickException):
    """Base error, rendered by click as `Error: <message>` with exit code 1"""


class ConfigurationError(KubectlOpenstackError):
    pass


class DiscoveryError(KubectlOpenstackError):
    pass


class ServerError(KubectlOpenstackError):
    pass


class NotFoundError(KubectlOpenstackError):
    pass


class AmbiguousError(KubectlOpenstackError):
    pass


class ValidationError(KubectlOpenstackError):
    pass


class CloudsDataError(KubectlOpenstackError):
    pass


class ConflictError(KubectlOpenstackError):
    pass


class ClientIOError(KubectlOpenstackError):
    pass
