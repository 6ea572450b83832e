"""Account selection, aliases and OAuth client mapping."""

from __future__ import annotations

import os

from harvestcli.config.credentials import DEFAULT_CLIENT_NAME
from harvestcli.config.settings import ConfigError, read_config, write_config

ENV_ACCOUNT = "HARVEST_ACCOUNT"


def _resolve_alias(account: str) -> str:
    cfg = read_config()
    if cfg.account_aliases and account in cfg.account_aliases:
        return cfg.account_aliases[account]
    return account


def resolve_account(flag_account: str) -> str:
    """Pick the account: flag, then environment, then the config default."""
    if flag_account:
        return _resolve_alias(flag_account)

    env = os.environ.get(ENV_ACCOUNT, "")
    if env:
        return _resolve_alias(env)

    try:
        cfg = read_config()
    except ConfigError as exc:
        raise ConfigError(f"reading config: {exc}") from exc
    if cfg.default_account:
        return _resolve_alias(cfg.default_account)

    raise ConfigError(
        "no account specified: use --account flag, "
        f"{ENV_ACCOUNT} env, or set default_account in config"
    )


def resolve_client_for_account(email: str, override: str) -> str:
    """Pick the OAuth client: override, account mapping, domain mapping, default."""
    if override:
        return override
    try:
        cfg = read_config()
    except ConfigError:
        return DEFAULT_CLIENT_NAME
    if cfg.account_clients and email in cfg.account_clients:
        return cfg.account_clients[email]
    domain = domain_from_email(email)
    if domain and cfg.client_domains and domain in cfg.client_domains:
        return cfg.client_domains[domain]
    return DEFAULT_CLIENT_NAME


def set_account_alias(alias: str, email: str) -> None:
    """Create or update an account alias."""
    if not alias:
        raise ValueError("alias cannot be empty")
    if not email:
        raise ValueError("email cannot be empty")
    cfg = read_config()
    cfg.init_maps()
    cfg.account_aliases[alias] = email
    write_config(cfg)


def delete_account_alias(alias: str) -> None:
    """Remove an account alias."""
    if not alias:
        raise ValueError("alias cannot be empty")
    cfg = read_config()
    if not cfg.account_aliases or alias not in cfg.account_aliases:
        raise ConfigError(f"alias {alias!r} not found")
    del cfg.account_aliases[alias]
    write_config(cfg)


def list_account_aliases() -> dict[str, str]:
    """Return a copy of the configured aliases."""
    try:
        cfg = read_config()
    except ConfigError:
        return {}
    return dict(cfg.account_aliases or {})


def set_default_account(account: str) -> None:
    """Set the default account in the config."""
    cfg = read_config()
    cfg.default_account = account
    write_config(cfg)


def domain_from_email(email: str) -> str:
    """Return the lower-cased domain of an e-mail address, or ''."""
    idx = email.rfind("@")
    if idx < 0 or idx == len(email) - 1:
        return ""
    return email[idx + 1 :].lower()


def normalize_domain(domain: str) -> str:
    """Normalise a domain for comparison."""
    return domain.strip().lower()


def set_client_domain(domain: str, client: str) -> None:
    """Map a domain to an OAuth client."""
    if not domain:
        raise ValueError("domain cannot be empty")
    if not client:
        raise ValueError("client cannot be empty")
    cfg = read_config()
    cfg.init_maps()
    cfg.client_domains[normalize_domain(domain)] = client
    write_config(cfg)


def set_account_client(email: str, client: str) -> None:
    """Map an account to an OAuth client."""
    if not email:
        raise ValueError("email cannot be empty")
    if not client:
        raise ValueError("client cannot be empty")
    cfg = read_config()
    cfg.init_maps()
    cfg.account_clients[email] = client
    write_config(cfg)