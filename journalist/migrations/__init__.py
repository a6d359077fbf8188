"""
Schema migrations for the journal database.

Units live in versions/ and are applied by
journalist.database.migration_runner.MigrationRunner.
"""
