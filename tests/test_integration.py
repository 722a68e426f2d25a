"""End-to-end lifecycle tests against a simulated minikube."""

from pathlib import Path

import pytest

from clusterdeployer.config.loader import ConfigLoader
from clusterdeployer.config.validator import ConfigValidator
from clusterdeployer.minikube.deployer import Minikube
from clusterdeployer.minikube.executor import MinikubeError

KUBECONFIG_TEMPLATE = """apiVersion: v1
kind: Config
clusters:
- cluster:
    server: https://192.168.99.100:8443
  name: minikube
contexts:
- context:
    cluster: minikube
    user: minikube
  name: {context}
current-context: {context}
users:
- name: minikube
"""


class SimulatedMinikube:
    """Behaves like the minikube binary as far as the kubeconfig is concerned."""

    def __init__(self):
        self.running = False
        self.calls = []

    def __call__(self, env, *args):
        self.calls.append(list(args))
        path = Path(env["KUBECONFIG"])
        command = args[0]

        if command == "start":
            self.running = True
            path.write_text(KUBECONFIG_TEMPLATE.format(context="pending"))
            return "Done! kubectl is now configured to use \"minikube\"\n"

        if command == "update-context":
            if not self.running:
                raise MinikubeError("error running command 'minikube update-context': exit status 1")
            path.write_text(KUBECONFIG_TEMPLATE.format(context="minikube"))
            return "\"minikube\" context has been updated\n"

        if command == "delete":
            # minikube only deletes its own entries; the file itself is left behind
            self.running = False
            return "Removed all traces of the \"minikube\" cluster.\n"

        raise MinikubeError(f"error running command 'minikube {command}': exit status 64")


class TestLifecycle:
    """Create, read and delete a cluster defined in a YAML file."""

    @pytest.fixture
    def config(self, tmp_path):
        config_file = tmp_path / "cluster.yaml"
        config_file.write_text(
            f"""
apiVersion: clusterdeployer.io/v1
kind: MinikubeCluster
metadata:
  name: dev
spec:
  vmDriver: virtualbox
  proxy: http://proxy.example.com:3128
  kubeconfigPath: {tmp_path / 'dev.kubeconfig'}
"""
        )
        return ConfigLoader.load_from_file(config_file)

    def test_full_lifecycle(self, config, tmp_path):
        """Test create -> get_kubeconfig -> delete."""
        assert ConfigValidator.validate(config).valid

        simulated = SimulatedMinikube()
        deployer = Minikube.from_config(config, executor=simulated)

        deployer.create()

        assert simulated.running
        assert simulated.calls[0] == [
            "start",
            "--bootstrapper=kubeadm",
            "--vm-driver=virtualbox",
            "--docker-env",
            "http_proxy=http://proxy.example.com:3128",
            "--docker-env",
            "https_proxy=https://proxy.example.com:3128",
            "--docker-env",
            "no_proxy=proxy.example.com,192.168.0.0/16",
        ]
        assert simulated.calls[1] == ["update-context"]

        kubeconfig = deployer.get_kubeconfig()
        assert "current-context: minikube" in kubeconfig
        assert kubeconfig == (tmp_path / "dev.kubeconfig").read_text()

        deployer.delete()

        assert not simulated.running
        assert not (tmp_path / "dev.kubeconfig").exists()
        with pytest.raises(FileNotFoundError):
            deployer.get_kubeconfig()

        subcommands = [r.subcommand for r in deployer.history.get_history()]
        assert subcommands == ["delete", "update-context", "start"]

    def test_get_kubeconfig_before_create(self, config):
        """Test that credentials are unavailable until create has run."""
        deployer = Minikube.from_config(config, executor=SimulatedMinikube())

        with pytest.raises(FileNotFoundError):
            deployer.get_kubeconfig()

    def test_delete_without_create(self, config):
        """Test that deleting a cluster that was never created succeeds."""
        simulated = SimulatedMinikube()
        deployer = Minikube.from_config(config, executor=simulated)

        deployer.delete()

        assert simulated.calls == [["delete"]]
