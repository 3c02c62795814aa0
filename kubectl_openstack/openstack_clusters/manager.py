import collections
from urllib.parse import urlparse

from kubectl_openstack import kubectl
from kubectl_openstack import logs
from kubectl_openstack.clouds import manager as clouds_manager
from kubectl_openstack.errors import (
    AmbiguousError, CloudsDataError, ConfigurationError, DiscoveryError, NotFoundError, ValidationError
)


OPENSTACK_CLUSTER_GROUP = 'infrastructure.cluster.x-k8s.io'
OPENSTACK_CLUSTER_RESOURCE = 'openstackclusters'

CLOUDS_SECRET_KEY = 'clouds.yaml'

IdentityRef = collections.namedtuple('IdentityRef', ['kind', 'name'])


def get_management_cluster(server_url):
    """Infer the management cluster name from an API server URL like https://api.NAME.example.com"""
    hostname = _hostname(server_url)
    if not hostname.startswith('api.'):
        raise ConfigurationError(
            f'cluster URL "{server_url}" has unrecognized format, expected "api.MANAGEMENT_CLUSTER..."'
        )
    return hostname.split('.', 2)[1]


def find_openstack_cluster_gvr(clients):
    for group in kubectl.get_server_groups(clients):
        preferred_version = group.preferred_version
        if preferred_version and preferred_version.group_version.startswith(OPENSTACK_CLUSTER_GROUP):
            gvr = kubectl.GroupVersionResource(
                OPENSTACK_CLUSTER_GROUP, preferred_version.version, OPENSTACK_CLUSTER_RESOURCE
            )
            logs.debug('found openstack cluster resource', group=gvr.group, version=gvr.version)
            return gvr
    raise DiscoveryError(f'GroupVersion "{OPENSTACK_CLUSTER_GROUP}" is not registered with the cluster')


def find_openstack_cluster(clients, namespace, name):
    gvr = find_openstack_cluster_gvr(clients)
    if namespace:
        return kubectl.get_custom_object(clients, gvr, namespace, name)
    matches = [
        item for item in kubectl.list_custom_objects(clients, gvr)
        if (item.get('metadata') or {}).get('name') == name
    ]
    if len(matches) == 0:
        raise NotFoundError(f'cluster with name "{name}" not found')
    if len(matches) > 1:
        raise AmbiguousError(f'found more than one cluster with name "{name}", try re-running with --namespace flag')
    return matches[0]


def get_identity_ref(resource):
    identity_ref = IdentityRef(
        kind=kubectl.get_nested_string(resource, 'spec', 'identityRef', 'kind'),
        name=kubectl.get_nested_string(resource, 'spec', 'identityRef', 'name'),
    )
    if identity_ref.kind != 'Secret':
        raise ValidationError(f'only .spec.identityRef.kind = "Secret" supported but got "{identity_ref.kind}"')
    return identity_ref


def get_secret_cloud(clients, namespace, secret_name):
    """Return the single cloud embedded in the clouds.yaml key of the identity secret"""
    secret = kubectl.get_secret(clients, namespace, secret_name)
    secret_id = f'secret/{secret.metadata.name} in {secret.metadata.namespace}'
    clouds_yaml = kubectl.decode_secret(secret, CLOUDS_SECRET_KEY)
    if clouds_yaml is None:
        raise CloudsDataError(f'{secret_id} does not have "{CLOUDS_SECRET_KEY}" data field')
    document = clouds_manager.load(clouds_yaml, secret_id)
    return clouds_manager.single_cloud(document, secret_id)


def _hostname(url):
    # case preserving, unlike urlparse().hostname
    host = urlparse(url).netloc.rpartition('@')[2]
    if host.startswith('['):
        return host[1:].partition(']')[0]
    return host.partition(':')[0]
