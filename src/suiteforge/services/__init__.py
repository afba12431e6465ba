"""Services: authenticated API client, credentials and entity builders."""
