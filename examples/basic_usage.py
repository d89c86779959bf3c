#!/usr/bin/env python3
"""
Basic usage example for the DotConfig module.
"""
from DotConfig import parse_yaml, render_yaml

DEFAULTS = """
app:
  name: demo
  debug: false
  workers: 4
  ids:
    - id-0
    - id-1
    - id-2
database:
  host: localhost
  port: 5432
"""

OVERRIDES = """
app:
  debug: "true"
  ids:
    - id-10
database:
  host: db.internal
"""

def main():
    """Main function."""
    defaults = parse_yaml(DEFAULTS)

    # Typed reads
    print("Workers:", defaults.get_int("app.workers"))
    print("Debug:", defaults.get_bool("app.debug"))
    print("Timeout (default):", defaults.safe_float("app.timeout", 2.5))

    # Sub-handles share the tree with their parent
    database = defaults.get("database")
    database.set("user", "admin")
    print("User via parent:", defaults.get_string("database.user"))

    # Writes create missing structure
    defaults.set("app.replicas.2", "standby")
    print("Replicas:", defaults.get_list("app.replicas"))

    # Layer overrides, then environment variables such as DEMO_DATABASE_HOST
    effective = defaults.extend(parse_yaml(OVERRIDES)).env("demo")
    print("\nEffective configuration:")
    print(render_yaml(effective.root))

if __name__ == '__main__':
    main()
