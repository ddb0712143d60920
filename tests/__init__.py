"""
genies test suite
=================

This package contains the tests for genies.

Test Modules
------------
- test_models.py: Tests for the configuration and scaffolding models
- test_naming.py: Tests for file and symbol name transformation
- test_config.py: Tests for configuration discovery, loading and writing
- test_paths.py: Tests for tsconfig alias resolution
- test_project.py: Tests for host project inspection
- test_writer.py: Tests for template rendering and file writing
- test_planner.py: Tests for scaffold planning
- test_initializer.py: Tests for the init flow
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_planner.py

    # Run specific test class
    pytest tests/test_planner.py::TestCrossDirectoryCollision
"""
