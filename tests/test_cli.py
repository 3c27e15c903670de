"""
Test suite for CLI interface

Tests CLI commands, exit codes and integration with the config store.
"""

import json
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from kube_switch.cli import (
    EXIT_IO,
    EXIT_PERSIST,
    EXIT_REJECTED,
    change_context,
    cli,
)
from kube_switch.config import set_config
from kube_switch.errors import NamespaceListingError


class TestCLICommands:
    """Test CLI group functionality"""

    def setup_method(self):
        """Setup test fixtures"""
        self.runner = CliRunner()

    def test_cli_group_help(self):
        """Test CLI group help command"""
        result = self.runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "kube-switch - switch kubeconfig context and namespace" in result.output
        assert "change-context" in result.output
        assert "change-namespace" in result.output
        assert "completion" in result.output

    def test_cli_version(self):
        """Test CLI version display"""
        result = self.runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_change_context_help(self):
        result = self.runner.invoke(change_context, ["--help"])
        assert result.exit_code == 0
        assert "Switch the current context" in result.output


class TestChangeContextCommand:
    """Test change-context CLI command"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_switch(self, yaml_kubeconfig):
        result = self.runner.invoke(
            cli, ["change-context", "b"], env={"KUBECONFIG": str(yaml_kubeconfig)}
        )

        assert result.exit_code == 0
        assert "Switched to context b" in result.output
        assert yaml.safe_load(yaml_kubeconfig.read_text())["current-context"] == "b"

    def test_already_current(self, yaml_kubeconfig):
        before = yaml_kubeconfig.read_bytes()
        result = self.runner.invoke(
            cli, ["--kubeconfig", str(yaml_kubeconfig), "change-context", "a"]
        )

        assert result.exit_code == 0
        assert "Already in context a" in result.output
        assert yaml_kubeconfig.read_bytes() == before

    def test_unknown_context(self, yaml_kubeconfig):
        before = yaml_kubeconfig.read_bytes()
        result = self.runner.invoke(
            cli, ["--kubeconfig", str(yaml_kubeconfig), "change-context", "c"]
        )

        assert result.exit_code == EXIT_REJECTED
        assert "Context c does not exist" in result.output
        assert yaml_kubeconfig.read_bytes() == before

    def test_missing_argument(self):
        result = self.runner.invoke(cli, ["change-context"])
        assert result.exit_code != 0


class TestChangeNamespaceCommand:
    """Test change-namespace CLI command"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_set_namespace(self, json_kubeconfig):
        result = self.runner.invoke(
            cli, ["--kubeconfig", str(json_kubeconfig), "change-namespace", "z"]
        )

        assert result.exit_code == 0
        assert "Updated namespace to z" in result.output
        data = json.loads(json_kubeconfig.read_text())
        assert data["contexts"][0]["context"]["namespace"] == "z"

    def test_already_in_namespace(self, json_kubeconfig):
        result = self.runner.invoke(
            cli, ["--kubeconfig", str(json_kubeconfig), "change-namespace", "x"]
        )
        assert result.exit_code == 0
        assert "Already in namespace x" in result.output

    def test_no_current_context(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("apiVersion: v1\ncontexts: []\n")

        result = self.runner.invoke(cli, ["--kubeconfig", str(path), "change-namespace", "x"])

        assert result.exit_code == EXIT_REJECTED
        assert "No current context set" in result.output


class TestFailures:
    """Test exit codes of non-validation failures"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_unresolvable_location(self):
        result = self.runner.invoke(
            cli, ["change-context", "a"], env={"KUBECONFIG": "", "HOME": ""}
        )

        assert result.exit_code == EXIT_IO
        assert "HOME environment variable empty or unset" in result.output

    def test_missing_file(self, tmp_path):
        result = self.runner.invoke(
            cli, ["--kubeconfig", str(tmp_path / "absent"), "change-context", "a"]
        )
        assert result.exit_code == EXIT_IO
        assert "Reading" in result.output

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("contexts: [unclosed\n")

        result = self.runner.invoke(cli, ["--kubeconfig", str(path), "change-context", "a"])

        assert result.exit_code == EXIT_IO
        assert "malformed YAML" in result.output

    def test_invalid_settings_file(self, tmp_path, monkeypatch, yaml_kubeconfig):
        settings_file = tmp_path / "settings.yml"
        settings_file.write_text("write_mode: carrier\n")
        monkeypatch.setenv("KUBE_SWITCH_SETTINGS_FILE", str(settings_file))
        set_config(None)

        result = self.runner.invoke(
            cli, ["--kubeconfig", str(yaml_kubeconfig), "change-context", "b"]
        )

        assert result.exit_code == EXIT_IO
        assert "Invalid settings" in result.output
        assert yaml.safe_load(yaml_kubeconfig.read_text())["current-context"] == "a"

    def test_unparsable_settings_file(self, tmp_path, monkeypatch, yaml_kubeconfig):
        settings_file = tmp_path / "settings.yml"
        settings_file.write_text("write_mode: [unclosed\n")
        monkeypatch.setenv("KUBE_SWITCH_SETTINGS_FILE", str(settings_file))
        set_config(None)

        result = self.runner.invoke(
            cli, ["--kubeconfig", str(yaml_kubeconfig), "change-context", "b"]
        )

        assert result.exit_code == EXIT_IO
        assert "Cannot load settings file" in result.output

    def test_invalid_log_level(self, yaml_kubeconfig):
        result = self.runner.invoke(
            cli,
            ["--log-level", "verbose", "--kubeconfig", str(yaml_kubeconfig), "change-context", "b"],
        )

        assert result.exit_code == EXIT_IO
        assert "Invalid logging configuration" in result.output
        assert yaml.safe_load(yaml_kubeconfig.read_text())["current-context"] == "a"

    def test_persist_failure(self, yaml_kubeconfig):
        before = yaml_kubeconfig.read_bytes()
        with patch("kube_switch.persistence.os.replace", side_effect=OSError("disk full")):
            result = self.runner.invoke(
                cli, ["--kubeconfig", str(yaml_kubeconfig), "change-context", "b"]
            )

        assert result.exit_code == EXIT_PERSIST
        assert "disk full" in result.output
        assert yaml_kubeconfig.read_bytes() == before


class TestCompletionCommands:
    """Test complete and completion commands"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_complete_contexts(self, yaml_kubeconfig):
        result = self.runner.invoke(
            cli,
            ["--kubeconfig", str(yaml_kubeconfig), "complete", "kube-switch", "", "sc"],
        )

        assert result.exit_code == 0
        assert result.output == "a\nb\n"

    @patch("kube_switch.cli.list_namespaces")
    def test_complete_namespaces(self, mock_list, yaml_kubeconfig):
        mock_list.return_value = ["default", "kube-system", "monitoring"]

        result = self.runner.invoke(
            cli,
            ["--kubeconfig", str(yaml_kubeconfig), "complete", "kube-switch", "d", "cn"],
        )

        assert result.exit_code == 0
        assert result.output == "default\n"
        assert mock_list.call_args.kwargs["timeout"] == 5.0

    @patch("kube_switch.cli.list_namespaces")
    def test_complete_namespaces_failure(self, mock_list, yaml_kubeconfig):
        mock_list.side_effect = NamespaceListingError("cluster unreachable")

        result = self.runner.invoke(
            cli,
            ["--kubeconfig", str(yaml_kubeconfig), "complete", "kube-switch", "", "cn"],
        )

        assert result.exit_code == EXIT_IO
        assert "cluster unreachable" in result.output

    def test_completion_script(self):
        result = self.runner.invoke(cli, ["completion"])

        assert result.exit_code == 0
        assert 'alias cn="kube-switch change-namespace"' in result.output
        assert 'complete -C "kube-switch complete" sc' in result.output
