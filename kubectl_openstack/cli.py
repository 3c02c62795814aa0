import click
import os

from kubectl_openstack.login import cli as login_cli


CLICK_CLI_MAX_CONTENT_WIDTH = 200


class Group(click.Group):
    """click group exiting with code 1 on usage errors, like on every other failure"""

    def make_context(self, *args, **kwargs):
        try:
            return super().make_context(*args, **kwargs)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def default_kubeconfig():
    return os.path.expanduser(os.path.join('~', '.kube', 'config'))


def default_clouds_file():
    return os.path.expanduser(os.path.join('~', '.config', 'openstack', 'clouds.yaml'))


@click.group(cls=Group, context_settings={'max_content_width': CLICK_CLI_MAX_CONTENT_WIDTH}, no_args_is_help=False)
@click.option('--kubeconfig', envvar='KUBECONFIG', default=default_kubeconfig, show_default='KUBECONFIG or ~/.kube/config',
              help='path to the kubeconfig file')
@click.option('--clouds-file', default=default_clouds_file, show_default='~/.config/openstack/clouds.yaml',
              help='path to the clouds.yaml file')
@click.option('--management-cluster', help='name of the management cluster, if not set will be inferred from the API URL')
@click.option('-f', '--force', is_flag=True, help='force overwriting existing cloud (if it exists) in the clouds file')
@click.option('--debug', is_flag=True)
@click.pass_context
def main(ctx, kubeconfig, clouds_file, management_cluster, force, debug):
    """Log in to the OpenStack cloud of an OpenStackCluster resource"""
    if debug:
        os.environ.setdefault('KUBECTL_OPENSTACK_DEBUG', 'y')
    ctx.obj = {
        'kubeconfig': kubeconfig,
        'clouds_file': clouds_file,
        'management_cluster': management_cluster,
        'force': force,
    }


main.add_command(login_cli.login)


if __name__ == '__main__':
    main()
