"""Tools for inspecting, merging and exporting OpenAPI 3 and Swagger 2.0 specifications."""

__version__ = "0.1.0"