"""Cross-cutting helpers: settings, logging, database, security and time."""
