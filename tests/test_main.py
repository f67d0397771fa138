"""
Tests for platform wiring, configuration and the demo scenario.
"""

import json

from fastapi.testclient import TestClient

from demo.demo_scenario import run_demo
from registrar.main import DEFAULT_CONFIG, RegistrarPlatform, load_config


class TestConfig:

    def test_defaults(self):
        assert load_config() == DEFAULT_CONFIG

    def test_file_and_overrides(self, tmp_path):
        path = tmp_path / "registrar.json"
        path.write_text(json.dumps({"rest_port": 9001, "log_level": "DEBUG"}))

        config = load_config(str(path), {"rest_port": 9002, "rest_host": None})

        assert config['rest_port'] == 9002
        assert config['log_level'] == "DEBUG"
        assert config['rest_host'] == DEFAULT_CONFIG['rest_host']


class TestPlatform:

    def test_sample_data(self):
        platform = RegistrarPlatform()
        courses = platform.facade.list_courses().data

        assert [c['course_code'] for c in courses['courses']] == ["CS101", "MA202"]
        assert courses['total_enrolled'] == 2
        names = [s['name'] for s in platform.facade.list_students().data['students']]
        assert names == ["Alice Johnson", "Bob Smith"]

    def test_empty_store(self):
        platform = RegistrarPlatform({'load_sample_data': False})
        assert platform.facade.list_courses().data['courses'] == []

    def test_app_serves_sample_data(self):
        client = TestClient(RegistrarPlatform().app)
        assert client.get("/courses/CS101").json()['enrolled_count'] == 2

    def test_facade_shares_platform_store(self):
        """The facade works on the platform's own store and lock settings"""
        platform = RegistrarPlatform({'load_sample_data': False, 'lock_timeout': 0.5})
        assert platform.facade.store is platform._store
        assert platform.facade.store.concurrency_manager.default_timeout == 0.5

    def test_run_demo_prints_listing(self, capsys):
        RegistrarPlatform().run_demo()
        out = capsys.readouterr().out
        assert "[CS101] Intro to Programming (Capacity: 5)" in out
        assert "Total Students Enrolled System-Wide: 2" in out


class TestDemoScenario:

    def test_demo_runs(self, capsys):
        facade = run_demo()
        out = capsys.readouterr().out

        assert "capacity_exceeded" in out
        assert "not_enrolled" in out
        course = facade.store.get_course("CS101")
        assert course.enrolled_count == 2
        assert course.max_capacity == 4
