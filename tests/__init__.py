"""
Alchemy Table Test Suite
========================

Test Organization
-----------------
- tests/unit/          : Fast unit tests (no I/O beyond tmp_path)
- tests/unit/domain/   : Domain record tests

Testing Philosophy
------------------
- Engines are pure: test them with literal scenarios and properties
- Services: assert returned values and logged operations
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
