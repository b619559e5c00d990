"""Tests for the command-line interface."""

import argparse
import io
import json

import pytest
from kubernetes import client

from kubesecret import cli
from kubesecret.constants import DEFAULT_OUTPUT_FORMAT
from kubesecret.exceptions import ConfigurationError, SecretQueryError
from kubesecret.models import LookupOptions, SecretRecord

from conftest import make_v1_secret


def _options(argv):
    args = cli.parse_args(argv)
    return cli.options_from_args(args)


class TestOptionsFromArgs:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("KUBESECRET_OUTPUT", raising=False)
        opts = _options(["my-apache"])
        assert opts.fragment == "my-apache"
        assert opts.key_filter == ""
        assert opts.namespace is None
        assert opts.output == "env"
        assert not opts.color and not opts.metadata and not opts.compact
        assert opts.request_timeout is None

    def test_all_flags(self):
        opts = _options([
            "db", "pass", "--namespace", "prod", "--label", "app=db", "--field", "type=Opaque",
            "--type", "Opaque", "--out", "yml", "--color", "--metadata", "--compact",
            "--kubeconfig", "/tmp/kc", "--context", "dev", "--request-timeout", "2.5",
        ])
        assert opts == LookupOptions(
            fragment="db", key_filter="pass", namespace="prod", type_filter="Opaque",
            label_selector="app=db", field_selector="type=Opaque", output="yaml",
            color=True, metadata=True, compact=True, kubeconfig="/tmp/kc", context="dev",
            request_timeout=2.5,
        )

    def test_lookup_options_default_output(self):
        assert LookupOptions(fragment="db").output == DEFAULT_OUTPUT_FORMAT

    def test_output_from_environment(self, monkeypatch):
        monkeypatch.setenv("KUBESECRET_OUTPUT", "json")
        assert _options(["db"]).output == "json"

    def test_missing_fragment(self):
        with pytest.raises(ConfigurationError, match="Missing main argument"):
            _options([])

    def test_unknown_output(self):
        with pytest.raises(ConfigurationError):
            _options(["db", "--out", "xml"])


class TestBoolFlags:

    def test_bare_switch_enables(self):
        opts = _options(["my-apache", "--color"])
        assert opts.color is True
        assert opts.fragment == "my-apache"

    def test_bare_switch_before_positional(self):
        opts = _options(["--color", "my-apache"])
        assert opts.color is True
        assert opts.fragment == "my-apache"

    @pytest.mark.parametrize("value", ["true", "True", "1", "yes", "on"])
    def test_explicit_true(self, value):
        assert _options(["db", f"--color={value}"]).color is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off"])
    def test_explicit_false(self, value):
        assert _options(["db", f"--metadata={value}"]).metadata is False

    def test_explicit_false_overrides_earlier_switch(self):
        assert _options(["db", "--compact", "--compact=false"]).compact is False

    def test_no_prefix(self):
        assert _options(["db", "--no-color"]).color is False

    def test_invalid_value_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as exc:
            _options(["db", "--color=maybe"])
        assert exc.value.code == 2
        assert "argument --color" in capsys.readouterr().err

    def test_values_after_double_dash_untouched(self):
        assert cli.expand_bool_flags(["--", "--color=true"], cli.build_parser()) == ["--", "--color=true"]

    def test_parse_bool_rejects_garbage(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_bool("maybe")


class TestReportCandidates:

    def test_none(self):
        out = io.StringIO()
        cli.report_candidates([], LookupOptions(fragment="x"), out)
        assert out.getvalue() == "No secret found\n"

    def test_ambiguous(self):
        out = io.StringIO()
        candidates = [SecretRecord(name="dev-env-cert"), SecretRecord(name="qa-env-cert")]
        cli.report_candidates(candidates, LookupOptions(fragment="env-cert"), out)
        assert out.getvalue() == (
            "Unable to determine the target. Try one of these:\ndev-env-cert\nqa-env-cert\n"
        )

    def test_single_secret(self):
        out = io.StringIO()
        secret = SecretRecord(name="db", type="Opaque", data={"user": b"admin", "pass": b"pw"})
        cli.report_candidates([secret], LookupOptions(fragment="db"), out)
        assert out.getvalue() == "pass=pw\nuser=admin\n"

    def test_single_secret_json_with_metadata(self):
        out = io.StringIO()
        secret = SecretRecord(name="db", type="Opaque", data={"user": b"admin", "pass": b"pw"})
        opts = LookupOptions(fragment="db", key_filter="user", output="json", metadata=True)
        cli.report_candidates([secret], opts, out)
        doc = json.loads(out.getvalue())
        assert doc == {
            "metadata": {"Name": "db", "Type": "Opaque", "Count": 2, "Size": 7},
            "values": {"user": "admin"},
        }


class TestRun:

    def test_uses_given_namespace(self, core):
        core.list_namespaced_secret.return_value = client.V1SecretList(
            items=[make_v1_secret("my-apache-3", {"k": b"v3"}), make_v1_secret("my-apache-9", {"k": b"v9"})]
        )
        out = io.StringIO()
        assert cli.run(LookupOptions(fragment="my-apache", namespace="web"), core=core, out=out) == 0
        assert out.getvalue() == "k=v9\n"
        core.list_namespaced_secret.assert_called_once_with(namespace="web", _request_timeout=None)

    def test_resolves_namespace_when_unset(self, core, monkeypatch):
        monkeypatch.setattr(cli, "resolve_namespace", lambda kubeconfig, context: "team-a")
        cli.run(LookupOptions(fragment="x"), core=core, out=io.StringIO())
        core.read_namespaced_secret.assert_called_once_with(name="x", namespace="team-a", _request_timeout=None)


class TestMain:

    def test_success(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "run", lambda options: 0)
        with pytest.raises(SystemExit) as exc:
            cli.main(["db"])
        assert exc.value.code == 0

    def test_missing_argument_exits_1(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main([])
        assert exc.value.code == 1
        assert "Error: Missing main argument" in capsys.readouterr().err

    def test_query_error_exits_1(self, monkeypatch, capsys):
        def _fail(options):
            raise SecretQueryError("Unable to list secrets in web: 500 Boom")
        monkeypatch.setattr(cli, "run", _fail)
        with pytest.raises(SystemExit) as exc:
            cli.main(["db", "--namespace", "web"])
        assert exc.value.code == 1
        assert "Unable to list secrets in web" in capsys.readouterr().err

    def test_unexpected_error_exits_1(self, monkeypatch, capsys):
        def _fail(options):
            raise RuntimeError("connection refused")
        monkeypatch.setattr(cli, "run", _fail)
        with pytest.raises(SystemExit) as exc:
            cli.main(["db"])
        assert exc.value.code == 1
        assert "RuntimeError: connection refused" in capsys.readouterr().err

    def test_keyboard_interrupt_exits_130(self, monkeypatch, capsys):
        def _interrupt(options):
            raise KeyboardInterrupt
        monkeypatch.setattr(cli, "run", _interrupt)
        with pytest.raises(SystemExit) as exc:
            cli.main(["db"])
        assert exc.value.code == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_color_enables_windows_console_support(self, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "just_fix_windows_console", lambda: calls.append(True))
        monkeypatch.setattr(cli, "run", lambda options: 0)
        with pytest.raises(SystemExit):
            cli.main(["db", "--color=true"])
        assert calls == [True]

    def test_no_color_leaves_console_alone(self, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "just_fix_windows_console", lambda: calls.append(True))
        monkeypatch.setattr(cli, "run", lambda options: 0)
        with pytest.raises(SystemExit):
            cli.main(["db", "--color=false"])
        assert calls == []

    @pytest.mark.parametrize("timeout", ["nan", "inf", "-inf"])
    def test_non_finite_timeout_exits_1(self, timeout, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["db", f"--request-timeout={timeout}"])
        assert exc.value.code == 1
        assert "Request timeout" in capsys.readouterr().err
