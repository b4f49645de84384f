"""Swagger 2.0 specification model, reading, copying, merging and counting."""