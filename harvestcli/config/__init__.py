"""Configuration files, OAuth client credentials and account resolution."""