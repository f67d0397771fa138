"""
Main entry point for the Registrar platform.
"""

import json
import logging
import threading
import time
from typing import Any, Dict, Optional

from .api.admin_facade import AdminFacade
from .api.rest_api import RegistrarRestAPI
from .services import ConcurrencyManager, EntityStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'rest_host': '0.0.0.0',
    'rest_port': 8000,
    'log_level': 'INFO',
    'load_sample_data': True,
    'lock_timeout': None,
}


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge a JSON config file and explicit overrides onto the defaults."""
    config = dict(DEFAULT_CONFIG)
    if path:
        with open(path, 'r') as f:
            config.update(json.load(f))
    if overrides:
        config.update({k: v for k, v in overrides.items() if v is not None})
    return config


def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


class RegistrarPlatform:
    """Main platform class that wires the store, services and APIs."""

    def __init__(self, config: Optional[dict] = None):
        self._config = load_config(overrides=config)
        self._store = None
        self._facade = None
        self._rest_api = None
        self._rest_thread = None
        self._running = False

        self._initialize_platform()

    def _initialize_platform(self):
        """Initialize the platform with all services."""
        logger.info("Initializing Registrar platform...")

        concurrency_manager = ConcurrencyManager(default_timeout=self._config.get('lock_timeout'))
        self._store = EntityStore(concurrency_manager)
        self._facade = AdminFacade.create(self._store)
        self._rest_api = RegistrarRestAPI(self._facade)

        if self._config.get('load_sample_data', True):
            self.create_sample_data()

        logger.info("Registrar platform initialized")

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @property
    def facade(self) -> AdminFacade:
        return self._facade

    @property
    def app(self):
        return self._rest_api.app

    def create_sample_data(self):
        """Create the sample courses and students available at startup."""
        facade = self._facade
        facade.add_course("CS101", "Intro to Programming", 5)
        facade.add_course("MA202", "Calculus II", 3)
        alice = facade.add_student("Alice Johnson")
        bob = facade.add_student("Bob Smith")

        facade.enroll(alice.data['student_id'], "CS101")
        facade.enroll(bob.data['student_id'], "CS101")
        logger.info("Sample data created")

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """Start the REST server in a background thread."""
        if self._rest_thread is not None:
            logger.warning("REST server already running")
            return

        import uvicorn

        host = host or self._config['rest_host']
        port = port or self._config['rest_port']

        def run_server():
            uvicorn.run(
                self._rest_api.app,
                host=host,
                port=port,
                log_level=str(self._config.get('log_level', 'info')).lower()
            )

        self._rest_thread = threading.Thread(target=run_server, daemon=True)
        self._rest_thread.start()
        self._running = True

        logger.info("REST server started on %s:%s (docs at /docs)", host, port)

    def stop_platform(self):
        """Stop the platform."""
        if not self._running:
            logger.info("Platform not running")
            return
        self._running = False
        logger.info("Registrar platform stopped")

    def run_demo(self):
        """Print the current courses and students."""
        print("\n--- Available Courses ---")
        for course in self._facade.list_courses().data['courses']:
            print(f"[{course['course_code']}] {course['name']} (Capacity: {course['max_capacity']})")
        print(f"Total Students Enrolled System-Wide: {self._store.total_enrolled()}")
        print("\n--- Registered Students ---")
        for student in self._facade.list_students().data['students']:
            enrolled = ", ".join(student['enrollments']) or "None"
            print(f"ID: {student['student_id']} | Name: {student['name']} | "
                  f"Enrolled: {enrolled} | Overall Grade: {student['overall_grade']}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Registrar Course Enrollment and Grade Management")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--rest-port", type=int, help="REST server port")
    parser.add_argument("--log-level", type=str, help="Logging level")
    parser.add_argument("--no-sample-data", action="store_true", help="Start with an empty store")
    parser.add_argument("--demo", action="store_true", help="Print the sample data and exit")
    parser.add_argument("--config", type=str, help="Configuration file path")

    args = parser.parse_args()

    config = load_config(args.config, {
        'rest_host': args.host,
        'rest_port': args.rest_port,
        'log_level': args.log_level,
        'load_sample_data': False if args.no_sample_data else None,
    })
    configure_logging(config['log_level'])

    platform = RegistrarPlatform(config)

    try:
        if args.demo:
            platform.run_demo()
        else:
            platform.start_rest_server()
            print("\nPlatform is running. Press Ctrl+C to stop.")
            while True:
                time.sleep(1)

    except KeyboardInterrupt:
        print("\nShutting down...")
        platform.stop_platform()


if __name__ == "__main__":
    main()
