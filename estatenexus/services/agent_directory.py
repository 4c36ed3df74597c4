"""Agent directory backed by the seed records."""

from functools import lru_cache
from typing import Optional

from estatenexus.data.agents import AGENT_RECORDS
from estatenexus.models.agent import AgentProfile


@lru_cache(maxsize=1)
def _load() -> tuple[AgentProfile, ...]:
    return tuple(AgentProfile.model_validate(record) for record in AGENT_RECORDS)


def list_agents() -> list[AgentProfile]:
    return list(_load())


def get_agent(agent_id: str) -> Optional[AgentProfile]:
    for agent in _load():
        if agent.id == agent_id:
            return agent
    return None
