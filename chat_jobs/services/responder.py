"""Canned reply generator.

Replies are picked from an ordered list of keyword templates: the first
template with a keyword contained in the message (case-insensitive) wins,
otherwise the default reply is returned.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReplyTemplate:
    keywords: tuple[str, ...]
    response: str

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)


TEMPLATES: tuple[ReplyTemplate, ...] = (
    ReplyTemplate(
        keywords=("architecture", "system", "design"),
        response=(
            "Great question about system architecture! This chat system uses a microservices "
            "approach with async job processing. The frontend communicates via REST APIs, jobs "
            "are queued for processing, and results are polled. This ensures scalability and "
            "reliability."
        ),
    ),
    ReplyTemplate(
        keywords=("scalability", "scale", "performance"),
        response=(
            "For scalability, we implement horizontal scaling with load balancers, database "
            "sharding, and message queues. The job processing system can handle thousands of "
            "concurrent requests through worker pools and async processing."
        ),
    ),
    ReplyTemplate(
        keywords=("reliability", "fault", "error"),
        response=(
            "Reliability is ensured through retry mechanisms, dead letter queues, circuit "
            "breakers, and idempotent operations. We implement health checks, graceful "
            "degradation, and comprehensive monitoring."
        ),
    ),
    ReplyTemplate(
        keywords=("security", "auth", "privacy"),
        response=(
            "Security measures include JWT authentication, rate limiting, input validation, "
            "HTTPS encryption, and data anonymization. We follow OWASP guidelines and implement "
            "zero-trust architecture."
        ),
    ),
    ReplyTemplate(
        keywords=("cost", "optimization", "budget"),
        response=(
            "Cost optimization strategies include auto-scaling based on demand, caching "
            "frequently accessed data, optimizing database queries, and using serverless "
            "functions for variable workloads."
        ),
    ),
)

DEFAULT_RESPONSE = (
    "That's an interesting question! I'm designed to help with various technical discussions. "
    "Could you provide more context about what specific aspect you'd like me to focus on?"
)


def generate(message: str, templates: tuple[ReplyTemplate, ...] = TEMPLATES) -> str:
    for template in templates:
        if template.matches(message):
            return template.response
    return DEFAULT_RESPONSE
