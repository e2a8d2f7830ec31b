# Core infrastructure: config, logging, database, exceptions
