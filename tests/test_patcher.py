"""
Method patching and restoration.
"""

from starmixin.patches import Patcher


class Host:
    def ping(self, value):
        return value * 2


class TestPatcher:
    def test_postfix_runs_after_the_original(self):
        seen = []
        patcher = Patcher("test")
        patcher.postfix(Host, "ping", lambda instance: seen.append(instance))

        host = Host()
        assert host.ping(3) == 6
        assert seen == [host]
        assert Host.ping.__name__ == "ping"
        patcher.unpatch_all()

    def test_same_method_is_patched_once(self):
        patcher = Patcher("test")

        assert patcher.postfix(Host, "ping", lambda instance: None)
        assert patcher.postfix(Host, "ping", lambda instance: None) is False
        assert patcher.postfix(Host, "missing", lambda instance: None) is False
        patcher.unpatch_all()

    def test_failing_hook_keeps_the_result(self, caplog):
        patcher = Patcher("test")

        def broken(instance):
            raise RuntimeError("hook failed")

        patcher.postfix(Host, "ping", broken)

        assert Host().ping(2) == 4
        assert any("postfix of Host.ping failed" in record.getMessage() for record in caplog.records)
        patcher.unpatch_all()

    def test_unpatch_restores_inherited_and_own_methods(self):
        class Child(Host):
            pass

        original = Host.__dict__["ping"]
        patcher = Patcher("test")
        patcher.postfix(Host, "ping", lambda instance: None)
        patcher.postfix(Child, "ping", lambda instance: None)

        patcher.unpatch_all()

        assert Host.__dict__["ping"] is original
        assert "ping" not in Child.__dict__

    def test_base_patched_after_subclass_still_runs(self):
        class Child(Host):
            pass

        seen = []
        patcher = Patcher("test")
        patcher.postfix(Child, "ping", lambda instance: seen.append("child"))
        patcher.postfix(Host, "ping", lambda instance: seen.append("host"))

        assert Child().ping(2) == 4
        assert seen == ["host", "child"]
        patcher.unpatch_all()

    def test_outermost_only_hook_runs_once_per_call(self):
        class Child(Host):
            pass

        seen = []
        patcher = Patcher("test")
        patcher.postfix(Child, "ping", lambda instance: seen.append("child"), outermost_only=True)
        patcher.postfix(Host, "ping", lambda instance: seen.append("host"), outermost_only=True)

        Child().ping(1)
        Host().ping(1)

        assert seen == ["child", "host"]
        patcher.unpatch_all()

    def test_stacked_patchers_unwind_in_reverse(self):
        calls = []
        original = Host.__dict__["ping"]
        outer, inner = Patcher("outer"), Patcher("inner")
        outer.postfix(Host, "ping", lambda instance: calls.append("outer"))
        inner.postfix(Host, "ping", lambda instance: calls.append("inner"))

        Host().ping(1)
        inner.unpatch_all()
        outer.unpatch_all()

        assert calls == ["outer", "inner"]
        assert Host.__dict__["ping"] is original
