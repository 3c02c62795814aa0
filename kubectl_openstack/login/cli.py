import click

from kubectl_openstack.login import manager


@click.command()
@click.argument('CLUSTER_NAME')
@click.option('-n', '--namespace', help='namespace of the OpenStackCluster resource, required only if the cluster name is ambiguous')
@click.option('-f', '--force', is_flag=True, help='same as the global --force flag')
@click.pass_obj
def login(obj, cluster_name, namespace, force):
    """Write the credentials of the OpenStackCluster CLUSTER_NAME to the clouds file

    Example:

        kubectl-openstack login -n org-acme acme-prod
    """
    manager.login(
        obj['kubeconfig'],
        obj['clouds_file'],
        cluster_name,
        management_cluster=obj['management_cluster'],
        namespace=namespace,
        force=force or obj['force'],
    )
