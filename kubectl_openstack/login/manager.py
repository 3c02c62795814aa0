from kubectl_openstack import kubectl
from kubectl_openstack import logs
from kubectl_openstack.clouds import manager as clouds_manager
from kubectl_openstack.errors import ConfigurationError
from kubectl_openstack.openstack_clusters import manager as openstack_clusters_manager


def login(kubeconfig, clouds_file, cluster_name, management_cluster=None, namespace=None, force=False):
    """Copy the cloud credentials of an OpenStackCluster into the local clouds file

    Returns the name of the cloud written to the clouds file.
    """
    if not kubeconfig:
        raise ConfigurationError('--kubeconfig flag / KUBECONFIG env var not set')
    if not clouds_file:
        raise ConfigurationError('--clouds-file flag not set')
    clients = kubectl.new_clients(kubeconfig)
    if not management_cluster:
        management_cluster = openstack_clusters_manager.get_management_cluster(kubectl.get_server_url(clients))
    cloud_name = get_cloud_name(management_cluster, cluster_name)
    logs.debug('login', cloud_name=cloud_name, namespace=namespace or '')

    resource = openstack_clusters_manager.find_openstack_cluster(clients, namespace, cluster_name)
    identity_ref = openstack_clusters_manager.get_identity_ref(resource)
    cloud = openstack_clusters_manager.get_secret_cloud(
        clients, resource['metadata']['namespace'], identity_ref.name
    )

    document = clouds_manager.read_clouds_file(clouds_file)
    clouds_manager.merge_cloud(document, cloud_name, cloud, force, clouds_file)
    clouds_manager.write_clouds_file(clouds_file, document)

    print_usage(cloud_name)
    return cloud_name


def get_cloud_name(management_cluster, cluster_name):
    if not management_cluster or not cluster_name:
        raise ConfigurationError(
            f'management cluster ("{management_cluster}") and cluster ("{cluster_name}") names must not be empty'
        )
    return f'{management_cluster}-{cluster_name}'


def print_usage(cloud_name):
    print()
    print('To use the cloud run:')
    print()
    print(f'    openstack --os-cloud="{cloud_name}" server list')
