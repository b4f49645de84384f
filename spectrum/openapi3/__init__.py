"""OpenAPI 3 specification reading, inspection, merging, tables and export."""