import pytest

from zabbix_rpc import MethodNamespace, ZabbixRPCError


def test_namespace_keyword_params(client, session):
    session.result([{"hostid": "10084", "name": "Zabbix server"}])

    hosts = client.host.get(output=["hostid", "name"], limit=1)

    assert hosts == [{"hostid": "10084", "name": "Zabbix server"}]
    assert session.bodies[0]["method"] == "host.get"
    assert session.bodies[0]["params"] == {"output": ["hostid", "name"], "limit": 1}


def test_namespace_positional_params(client, session):
    client.host.delete(["10001", "10002"])

    assert session.bodies[0]["method"] == "host.delete"
    assert session.bodies[0]["params"] == ["10001", "10002"]


def test_namespace_without_params_sends_empty_object(client, session):
    client.problem.get()
    assert session.bodies[0]["params"] == {}


def test_namespace_rejects_mixed_params(client, session):
    with pytest.raises(TypeError):
        client.host.get({"output": "extend"}, limit=1)
    with pytest.raises(TypeError):
        client.host.get({}, {})
    assert session.posts == []


def test_namespace_forwards_callback(client, session):
    session.error(-32602, "Invalid params.", 'Invalid parameter "/1": the parameter "host" is missing.')
    outcome = []

    client.host.create(name="web-01", callback=lambda err, res: outcome.append(err))

    assert isinstance(outcome[0], ZabbixRPCError)
    assert "callback" not in session.bodies[0]["params"]


def test_namespace_uses_session_token(client, session):
    session.result("token")
    client.user.login  # attribute access alone sends nothing
    assert session.posts == []

    client.authenticate()
    client.hostgroup.get(output="extend")

    assert session.bodies[-1]["auth"] == "token"


def test_private_names_are_not_namespaces(client):
    with pytest.raises(AttributeError):
        client._missing
    with pytest.raises(AttributeError):
        client.host._private


def test_namespace_type(client):
    assert isinstance(client.trigger, MethodNamespace)
    assert client.trigger.get.__name__ == "get"


def test_context_manager_logs_in_and_out(client, session):
    session.result("token")

    with client as zapi:
        assert zapi.session_token == "token"
        zapi.item.get(hostids=["10084"])

    assert [b["method"] for b in session.bodies] == ["user.login", "item.get", "user.logout"]
    assert client.session_token is None
    assert client.request_id == 0
    assert session.closed


def test_context_manager_keeps_body_exception_when_logout_fails(client, session, caplog):
    session.result("token").error(-32500, "Application error.", "Session terminated")

    with pytest.raises(KeyError):
        with client:
            raise KeyError("hostid")

    assert [b["method"] for b in session.bodies] == ["user.login", "user.logout"]
    assert "zabbix logout error" in caplog.text
    assert client.session_token == "token"
    assert session.closed


def test_context_manager_raises_on_failed_login(client, session):
    session.error(-32602, "Invalid params.", "Login name or password is incorrect.")

    with pytest.raises(ZabbixRPCError):
        with client:
            pytest.fail("body must not run")

    assert len(session.posts) == 1
    assert session.closed
