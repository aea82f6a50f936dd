"""Source module: fetch, unpack, and read origin repositories and target files."""
