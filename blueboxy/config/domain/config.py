"""Top-level ResilienceConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field, model_validator

from blueboxy.config.domain.policy import PolicyConfig
from blueboxy.retry.domain.policy import PRESETS, RetryPolicy

type PolicyName = str


class CacheConfig(BaseModel, frozen=True):
    max_entries: int | None = Field(default=100, ge=1)
    default_ttl_seconds: float = Field(default=1800.0, ge=0.0)


class MessagingConfig(BaseModel, frozen=True):
    model: str = Field(min_length=1)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    message_policy: PolicyName = "default"
    categories_policy: PolicyName = "conservative"
    message_ttl_seconds: float = Field(default=0.0, ge=0.0)
    # None falls back to cache.default_ttl_seconds.
    categories_ttl_seconds: float | None = Field(default=None, ge=0.0)
    # None serves the built-in catalogue instead of calling the API.
    api_base_url: str | None = None
    request_timeout_seconds: float = Field(default=20.0, gt=0.0)


class ResilienceConfig(BaseModel, frozen=True):
    """Root configuration aggregate.

    Named policies shadow the built-in presets of the same name.
    """

    policies: dict[PolicyName, PolicyConfig] = Field(default_factory=dict)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    messaging: MessagingConfig

    @model_validator(mode="after")
    def _messaging_policies_exist(self) -> "ResilienceConfig":
        unknown = [
            name
            for name in (self.messaging.message_policy, self.messaging.categories_policy)
            if name not in self.policies and name not in PRESETS
        ]
        if unknown:
            raise ValueError(
                f"messaging references unknown policies: {', '.join(unknown)}"
            )
        return self

    def policy(self, name: PolicyName) -> RetryPolicy | None:
        """Resolve a policy by name: configured first, then presets."""
        if name in self.policies:
            return self.policies[name].to_policy()
        return PRESETS.get(name)

    def policy_names(self) -> list[PolicyName]:
        return sorted(set(self.policies) | set(PRESETS))
