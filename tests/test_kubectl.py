import base64
import unittest
from types import SimpleNamespace
from unittest.mock import patch, MagicMock

from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException
from urllib3.exceptions import MaxRetryError

from kubectl_openstack import kubectl
from kubectl_openstack.errors import ConfigurationError, DiscoveryError, ServerError, ValidationError


OPENSTACK_CLUSTER = {
    'apiVersion': 'infrastructure.cluster.x-k8s.io/v1alpha7',
    'kind': 'OpenStackCluster',
    'metadata': {'name': 'acme', 'namespace': 'org-acme'},
    'spec': {'identityRef': {'kind': 'Secret', 'name': 'acme-cloud-config', 'empty': ''}},
}


def _api_exception(status, reason, body=None):
    e = ApiException(status=status, reason=reason)
    e.body = body
    return e


class KubectlTestCase(unittest.TestCase):
    @patch('kubectl_openstack.kubectl.config.load_kube_config')
    def test_new_clients(self, load_kube_config):
        def load(config_file, client_configuration):
            client_configuration.host = 'https://api.gauss.example.com:6443'
        load_kube_config.side_effect = load
        clients = kubectl.new_clients('/tmp/kubeconfig')
        self.assertEqual(load_kube_config.call_args[1]['config_file'], '/tmp/kubeconfig')
        self.assertEqual(kubectl.get_server_url(clients), 'https://api.gauss.example.com:6443')
        self.assertIs(clients.api_client.configuration.retries, False)

    @patch('kubectl_openstack.kubectl.config.load_kube_config')
    def test_new_clients_invalid_kubeconfig(self, load_kube_config):
        load_kube_config.side_effect = ConfigException('Invalid kube-config file.')
        with self.assertRaisesRegex(ConfigurationError, 'building config from kubeconfig /tmp/kubeconfig'):
            kubectl.new_clients('/tmp/kubeconfig')

    def test_get_server_groups_error(self):
        clients = MagicMock()
        clients.apis.get_api_versions.side_effect = _api_exception(403, 'Forbidden')
        with self.assertRaisesRegex(DiscoveryError, 'discovering server groups: 403 Forbidden'):
            kubectl.get_server_groups(clients)

    def test_get_server_groups_unreachable(self):
        clients = MagicMock()
        clients.apis.get_api_versions.side_effect = MaxRetryError(None, '/apis')
        with self.assertRaisesRegex(DiscoveryError, 'discovering server groups: Max retries exceeded with url: /apis'):
            kubectl.get_server_groups(clients)

    def test_get_secret_unreachable(self):
        clients = MagicMock()
        clients.core.read_namespaced_secret.side_effect = MaxRetryError(None, '/api/v1/namespaces/org-acme/secrets/acme')
        with self.assertRaisesRegex(ServerError, 'from server: Max retries exceeded'):
            kubectl.get_secret(clients, 'org-acme', 'acme')

    def test_get_custom_object_not_found(self):
        clients = MagicMock()
        clients.custom_objects.get_namespaced_custom_object.side_effect = _api_exception(
            404, 'Not Found', '{"kind": "Status", "message": "openstackclusters \\"acme\\" not found"}'
        )
        gvr = kubectl.GroupVersionResource('infrastructure.cluster.x-k8s.io', 'v1alpha7', 'openstackclusters')
        with self.assertRaisesRegex(ServerError, 'from server: openstackclusters "acme" not found'):
            kubectl.get_custom_object(clients, gvr, 'org-acme', 'acme')
        clients.custom_objects.get_namespaced_custom_object.assert_called_once_with(
            'infrastructure.cluster.x-k8s.io', 'v1alpha7', 'org-acme', 'openstackclusters', 'acme'
        )

    def test_list_custom_objects(self):
        clients = MagicMock()
        clients.custom_objects.list_cluster_custom_object.return_value = {'items': [OPENSTACK_CLUSTER]}
        gvr = kubectl.GroupVersionResource('infrastructure.cluster.x-k8s.io', 'v1alpha7', 'openstackclusters')
        self.assertEqual(kubectl.list_custom_objects(clients, gvr), [OPENSTACK_CLUSTER])

    def test_decode_secret(self):
        secret = SimpleNamespace(data={'clouds.yaml': base64.b64encode(b'clouds: {}\n').decode()})
        self.assertEqual(kubectl.decode_secret(secret, 'clouds.yaml'), b'clouds: {}\n')
        self.assertIsNone(kubectl.decode_secret(secret, 'other'))
        self.assertIsNone(kubectl.decode_secret(SimpleNamespace(data=None), 'clouds.yaml'))

    def test_get_nested_string(self):
        self.assertEqual(kubectl.get_nested_string(OPENSTACK_CLUSTER, 'spec', 'identityRef', 'kind'), 'Secret')

    def test_get_nested_string_not_found(self):
        with self.assertRaisesRegex(ValidationError, 'OpenStackCluster org-acme/acme path ".spec.identityRef.missing" not found'):
            kubectl.get_nested_string(OPENSTACK_CLUSTER, 'spec', 'identityRef', 'missing')
        with self.assertRaisesRegex(ValidationError, 'path ".status.ready" not found'):
            kubectl.get_nested_string(OPENSTACK_CLUSTER, 'status', 'ready')

    def test_get_nested_string_empty(self):
        with self.assertRaisesRegex(ValidationError, 'OpenStackCluster org-acme/acme value for path ".spec.identityRef.empty" is empty'):
            kubectl.get_nested_string(OPENSTACK_CLUSTER, 'spec', 'identityRef', 'empty')

    def test_get_nested_string_wrong_type(self):
        with self.assertRaisesRegex(ValidationError, 'expected string'):
            kubectl.get_nested_string(OPENSTACK_CLUSTER, 'spec', 'identityRef')
        with self.assertRaisesRegex(ValidationError, 'expected map'):
            kubectl.get_nested_string(OPENSTACK_CLUSTER, 'spec', 'identityRef', 'kind', 'name')
