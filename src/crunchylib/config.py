from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field

import httpx
import toml
import tomllib
from rich.prompt import Confirm, Prompt

from crunchylib.crunchyroll import BASIC_AUTH, TOKEN_URL, parse_token
from crunchylib.errors import AuthenticationError, RequestError
from crunchylib.options import Locale

CONFIG_FILE = "~/.crunchylib"


@dataclass
class CrunchyConfig:
    name: str | None
    refresh_token: str | None
    locale: Locale


@dataclass
class ProfileConfig:
    account_id: str
    refresh_token: str


@dataclass
class CrunchyConfigs:
    default: str | None = None
    locale: str | None = None
    configs: dict[str, ProfileConfig] = field(default_factory=dict)

    @staticmethod
    def load(config_file: str = CONFIG_FILE) -> CrunchyConfigs:
        config_file = os.path.expanduser(config_file)

        if not os.path.exists(config_file):
            return CrunchyConfigs()

        with open(config_file, "rb") as fp:
            data = tomllib.load(fp)

        default = None
        locale = None
        configs = {}
        for key, value in data.items():
            if key == "default":
                default = value
            if key == "locale":
                locale = value
            if isinstance(value, dict):
                configs[key] = ProfileConfig(
                    account_id=value["account_id"],
                    refresh_token=value["refresh_token"],
                )

        return CrunchyConfigs(default=default, locale=locale, configs=configs)

    def resolve(
        self, parser: argparse.ArgumentParser, args: argparse.Namespace
    ) -> CrunchyConfig:
        refresh_token = None
        name = args.config or self.default

        if name is not None:
            if name not in self.configs:
                parser.error(f"unknown config: {name}")
            refresh_token = self.configs[name].refresh_token

        if args.refresh_token:
            name, refresh_token = None, args.refresh_token

        locale = args.locale or self.locale or Locale.EN_US.value
        try:
            resolved_locale = Locale(locale)
        except ValueError:
            parser.error(f"unsupported locale: {locale}")

        return CrunchyConfig(name, refresh_token, resolved_locale)

    def configure(
        self,
        *,
        email: str | None = None,
        name: str | None = None,
    ):
        if email is None:
            email = Prompt.ask("Enter email")
        passwd = Prompt.ask("Enter password", password=True)

        try:
            resp = httpx.post(
                TOKEN_URL,
                data={
                    "grant_type": "password",
                    "username": email,
                    "password": passwd,
                    "scope": "offline_access",
                },
                headers={"Authorization": BASIC_AUTH},
            )
        except httpx.HTTPError as e:
            raise RequestError(f"POST {TOKEN_URL} failed: {e}", url=TOKEN_URL) from e
        if resp.is_error:
            raise AuthenticationError(
                f"Login failed with status {resp.status_code}",
                url=TOKEN_URL,
                status_code=resp.status_code,
            )
        token = parse_token(resp)
        if token.account_id is None or token.refresh_token is None:
            raise AuthenticationError(
                "Login did not return a refresh token", url=TOKEN_URL
            )

        if name is None:
            name = Prompt.ask(
                "Enter a name for this configuration", default=email.split("@")[0]
            )
        self.configs[name] = ProfileConfig(token.account_id, token.refresh_token)

        is_default = Confirm.ask(f"Make {name} the default profile?")
        if is_default:
            self.default = name

    def update_token(self, name: str, refresh_token: str):
        self.configs[name].refresh_token = refresh_token

    def save(self, config_file: str = CONFIG_FILE):
        output = {}
        if self.default is not None:
            output["default"] = self.default
        if self.locale is not None:
            output["locale"] = self.locale
        for key, value in self.configs.items():
            output[key] = {
                "account_id": value.account_id,
                "refresh_token": value.refresh_token,
            }
        config_file = os.path.expanduser(config_file)
        with open(config_file, "w") as fp:
            toml.dump(output, fp)
