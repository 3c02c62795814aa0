import base64
import collections
import json

from kubernetes import client
from kubernetes import config
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from kubectl_openstack import logs
from kubectl_openstack.errors import ConfigurationError, DiscoveryError, ServerError, ValidationError


Clients = collections.namedtuple('Clients', ['api_client', 'core', 'apis', 'custom_objects'])

GroupVersionResource = collections.namedtuple('GroupVersionResource', ['group', 'version', 'resource'])


def new_clients(kubeconfig):
    """Build the typed core client and the generic custom objects client from a kubeconfig file"""
    logs.debug('building clients', kubeconfig=kubeconfig)
    configuration = client.Configuration()
    # requests are never retried
    configuration.retries = False
    try:
        config.load_kube_config(config_file=kubeconfig, client_configuration=configuration)
    except (config.ConfigException, OSError) as e:
        raise ConfigurationError(f'building config from kubeconfig {kubeconfig}: {e}') from e
    api_client = client.ApiClient(configuration)
    return Clients(
        api_client=api_client,
        core=client.CoreV1Api(api_client),
        apis=client.ApisApi(api_client),
        custom_objects=client.CustomObjectsApi(api_client),
    )


def get_server_url(clients):
    return clients.api_client.configuration.host


def get_server_groups(clients):
    try:
        return clients.apis.get_api_versions().groups or []
    except (ApiException, HTTPError) as e:
        raise DiscoveryError(f'discovering server groups: {_api_error(e)}') from e


def get_custom_object(clients, gvr, namespace, name):
    logs.debug('getting custom object', resource=gvr.resource, namespace=namespace, name=name)
    try:
        return clients.custom_objects.get_namespaced_custom_object(
            gvr.group, gvr.version, namespace, gvr.resource, name
        )
    except (ApiException, HTTPError) as e:
        raise ServerError(f'from server: {_api_error(e)}') from e


def list_custom_objects(clients, gvr):
    logs.debug('listing custom objects in all namespaces', resource=gvr.resource)
    try:
        res = clients.custom_objects.list_cluster_custom_object(gvr.group, gvr.version, gvr.resource)
    except (ApiException, HTTPError) as e:
        raise ServerError(f'from server: {_api_error(e)}') from e
    return res.get('items') or []


def get_secret(clients, namespace, name):
    logs.debug('getting secret', namespace=namespace, name=name)
    try:
        return clients.core.read_namespaced_secret(name, namespace)
    except (ApiException, HTTPError) as e:
        raise ServerError(f'from server: {_api_error(e)}') from e


def decode_secret(secret, attr):
    value = (secret.data or {}).get(attr)
    if value is None:
        return None
    return base64.b64decode(value)


def resource_id(resource):
    metadata = resource.get('metadata') or {}
    return f'{resource.get("kind", "")} {metadata.get("namespace", "")}/{metadata.get("name", "")}'


def get_nested_string(resource, *path):
    """Return the non-empty string found at the given field path of an unstructured resource"""
    dotted_path = '.' + '.'.join(path)
    value = resource
    for i, field in enumerate(path):
        if not isinstance(value, dict):
            parent = '.' + '.'.join(path[:i])
            raise ValidationError(
                f'{resource_id(resource)}: {parent} accessor error: {value!r} is of the type '
                f'{type(value).__name__}, expected map'
            )
        if field not in value:
            raise ValidationError(f'{resource_id(resource)} path "{dotted_path}" not found')
        value = value[field]
    if not isinstance(value, str):
        raise ValidationError(
            f'{resource_id(resource)}: {dotted_path} accessor error: {value!r} is of the type '
            f'{type(value).__name__}, expected string'
        )
    if not value:
        raise ValidationError(f'{resource_id(resource)} value for path "{dotted_path}" is empty')
    return value


def _api_error(e):
    if not isinstance(e, ApiException):
        return str(e)
    try:
        message = json.loads(e.body)['message']
    except (TypeError, ValueError, KeyError):
        message = None
    return message or f'{e.status} {e.reason}'
