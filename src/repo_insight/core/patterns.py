"""Programming paradigm, design pattern and architecture classification."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from posixpath import basename, dirname

from repo_insight.core.rules import KeywordRule, MatchMode, any_path_matches, dedupe, rule_hits_any
from repo_insight.schemas import (
    ArchitectureReport,
    ArchitectureStyle,
    Paradigm,
    ParadigmReport,
    StructureFlags,
)


@dataclass(frozen=True)
class SignalRule:
    """Dependency/path signal with paradigm weights and the patterns it implies."""
    dependency_keywords: tuple[str, ...] = ()
    path_keywords: tuple[str, ...] = ()
    oop: int = 0
    functional: int = 0
    patterns: tuple[str, ...] = ()

    def present(self, dependencies: Sequence[str], paths: Sequence[str]) -> bool:
        return any_path_matches(dependencies, self.dependency_keywords) or any_path_matches(
            paths, self.path_keywords
        )


PARADIGM_SIGNALS: tuple[SignalRule, ...] = (
    # ORMs map tables onto classes
    SignalRule(dependency_keywords=("mongoose", "sequelize", "typeorm", "mikro-orm", "objection", "sqlalchemy", "bookshelf"), oop=2),
    SignalRule(
        dependency_keywords=("@nestjs/core", "inversify", "tsyringe", "typedi", "awilix", "dependency-injector"),
        oop=3,
        patterns=("Dependency Injection", "Decorator"),
    ),
    SignalRule(dependency_keywords=("@angular/core",), oop=2, patterns=("Dependency Injection",)),
    SignalRule(dependency_keywords=("class-validator", "class-transformer"), oop=1, patterns=("Decorator",)),
    SignalRule(path_keywords=("classes/", "entities/", ".entity."), oop=1, patterns=("Entity Model",)),
    SignalRule(path_keywords=("controllers/",), oop=1, patterns=("MVC",)),
    SignalRule(path_keywords=("factories/", "factory"), oop=1, patterns=("Factory",)),
    SignalRule(path_keywords=("singleton",), oop=1, patterns=("Singleton",)),
    SignalRule(dependency_keywords=("rxjs", "xstream", "@most/core", "baconjs"), functional=2, patterns=("Reactive Streams",)),
    SignalRule(dependency_keywords=("ramda", "fp-ts", "lodash/fp", "immutable", "immer", "sanctuary", "toolz"), functional=2, patterns=("Immutable Data",)),
    SignalRule(dependency_keywords=("redux", "zustand", "jotai", "recoil"), functional=1, patterns=("Flux / Unidirectional Data Flow",)),
    SignalRule(dependency_keywords=("react",), functional=1),
    SignalRule(path_keywords=("hooks/",), functional=1, patterns=("Hooks",)),
    SignalRule(path_keywords=("reducers/", "reducer."), functional=1, patterns=("Reducer",)),
    SignalRule(path_keywords=("utils/", "helpers/"), functional=1),
)

COMMON_PATTERNS: tuple[SignalRule, ...] = (
    SignalRule(path_keywords=("middleware",), patterns=("Middleware",)),
    SignalRule(
        dependency_keywords=("eventemitter", "socket.io", "mitt"),
        path_keywords=("event", "emitter", "listener", "subscriber", "observer"),
        patterns=("Observer / Event Emitter",),
    ),
    SignalRule(path_keywords=("repositor",), patterns=("Repository",)),
    SignalRule(path_keywords=("services/", "service."), patterns=("Service Layer",)),
    SignalRule(path_keywords=("dto",), patterns=("Data Transfer Object",)),
    SignalRule(path_keywords=("adapter",), patterns=("Adapter",)),
    SignalRule(dependency_keywords=("passport",), path_keywords=("strateg",), patterns=("Strategy",)),
    SignalRule(path_keywords=("components/",), patterns=("Composite",)),
)

# Evaluated in order; the margin of 2 keeps weak signals from tipping the verdict.
PARADIGM_RULES: tuple[tuple[Callable[[int, int], bool], Paradigm], ...] = (
    (lambda oop, fn: oop > fn + 2, Paradigm.OBJECT_ORIENTED),
    (lambda oop, fn: fn > oop + 2, Paradigm.FUNCTIONAL),
    (lambda oop, fn: oop == 0 and fn == 0, Paradigm.PROCEDURAL),
)

PARADIGM_DESCRIPTIONS: dict[Paradigm, str] = {
    Paradigm.OBJECT_ORIENTED: (
        "The codebase is organised around classes: ORM entities, injected services "
        "and controllers carry most of the behaviour."
    ),
    Paradigm.FUNCTIONAL: (
        "The codebase favours functions and immutable data, composing behaviour "
        "through hooks, reducers and stream operators rather than class hierarchies."
    ),
    Paradigm.PROCEDURAL: (
        "No strong paradigm signals were found; the code reads as straightforward "
        "modules and scripts executed top to bottom."
    ),
    Paradigm.MIXED: (
        "Object-oriented and functional signals are roughly balanced; classes and "
        "plain functions are used side by side."
    ),
}

ORCHESTRATION_KEYWORDS = ("docker-compose", "k8s/", "kubernetes/", "helm/", "skaffold")
SERVICE_MANIFESTS = ("package.json", "requirements.txt", "pyproject.toml", "go.mod", "pom.xml", "cargo.toml", "build.gradle")
SERVERLESS_PATH_KEYWORDS = ("serverless.yml", "serverless.yaml", "serverless.ts", "netlify/functions", "lambda/", "lambdas/")
SERVERLESS_DEPENDENCIES = ("serverless", "aws-lambda", "@netlify/functions", "firebase-functions", "@vercel/node", "mangum", "chalice")
STATIC_SITE_DEPENDENCIES = ("gatsby", "next", "nuxt", "astro", "@11ty/eleventy", "hexo", "vuepress", "docusaurus", "gridsome", "@sveltejs/kit")
MICROSERVICE_THRESHOLD = 2


@dataclass(frozen=True)
class ArchitectureContext:
    """Inputs available to architecture rules."""
    paths: Sequence[str]
    dependencies: Sequence[str]
    flags: StructureFlags


def service_directories(paths: Sequence[str]) -> list[str]:
    """Non-root directories holding both a Dockerfile and a dependency manifest."""
    docker_dirs = {dirname(p) for p in paths if basename(p).startswith("dockerfile")}
    manifest_dirs = {dirname(p) for p in paths if basename(p) in SERVICE_MANIFESTS}
    return sorted(d for d in docker_dirs & manifest_dirs if d)


def _is_microservices(ctx: ArchitectureContext) -> bool:
    return (
        any_path_matches(ctx.paths, ORCHESTRATION_KEYWORDS)
        and len(service_directories(ctx.paths)) > MICROSERVICE_THRESHOLD
    )


def _is_serverless(ctx: ArchitectureContext) -> bool:
    return (
        any_path_matches(ctx.paths, SERVERLESS_PATH_KEYWORDS)
        or any_path_matches(ctx.paths, ("functions/",), MatchMode.PREFIX)
        or any_path_matches(ctx.dependencies, SERVERLESS_DEPENDENCIES)
    )


def _is_jamstack(ctx: ArchitectureContext) -> bool:
    return any_path_matches(ctx.dependencies, STATIC_SITE_DEPENDENCIES) and not ctx.flags.has_server


# Priority order: the first predicate that holds decides the style.
ARCHITECTURE_RULES: tuple[tuple[Callable[[ArchitectureContext], bool], ArchitectureStyle], ...] = (
    (_is_microservices, ArchitectureStyle.MICROSERVICES),
    (_is_serverless, ArchitectureStyle.SERVERLESS),
    (_is_jamstack, ArchitectureStyle.JAMSTACK),
)

ARCHITECTURE_DESCRIPTIONS: dict[ArchitectureStyle, str] = {
    ArchitectureStyle.MICROSERVICES: (
        "Several independently containerised services are orchestrated together. "
        "Each service owns its dependencies and is deployed on its own."
    ),
    ArchitectureStyle.SERVERLESS: (
        "Backend logic runs as individually deployed functions on a managed "
        "platform instead of a long-running server process."
    ),
    ArchitectureStyle.JAMSTACK: (
        "A statically generated frontend is served from a CDN and talks to "
        "third-party APIs; there is no dedicated application server."
    ),
    ArchitectureStyle.MONOLITH: (
        "The application is built and deployed as a single unit, with all "
        "features sharing one codebase and runtime."
    ),
}

LAYER_RULES: tuple[KeywordRule[str], ...] = (
    KeywordRule(("components/", "pages/", "views/", "templates/", "ui/"), "Presentation"),
    KeywordRule(("services/", "service.", "usecase", "use-case", "use_case", "domain/"), "Business Logic"),
    KeywordRule(("repositor", "models/", "model.", "db/", "database/", "dao"), "Data Access"),
    KeywordRule(("api/", "routes/", "route.", "controllers/", "controller."), "API"),
)


def decide_paradigm(oop: int, functional: int) -> Paradigm:
    for applies, paradigm in PARADIGM_RULES:
        if applies(oop, functional):
            return paradigm
    return Paradigm.MIXED


def classify_paradigm(dependencies: Sequence[str], paths: Sequence[str]) -> ParadigmReport:
    """Score OOP against functional signals and collect design patterns."""
    deps = [d.lower() for d in dependencies]
    oop = functional = 0
    patterns: list[str] = []

    for signal in PARADIGM_SIGNALS:
        if signal.present(deps, paths):
            oop += signal.oop
            functional += signal.functional
            patterns.extend(signal.patterns)

    for signal in COMMON_PATTERNS:
        if signal.present(deps, paths):
            patterns.extend(signal.patterns)

    primary = decide_paradigm(oop, functional)
    return ParadigmReport(
        primary=primary,
        patterns=dedupe(patterns),
        description=PARADIGM_DESCRIPTIONS[primary],
        oop_score=oop,
        functional_score=functional,
    )


def classify_architecture(
    dependencies: Sequence[str],
    paths: Sequence[str],
    flags: StructureFlags,
) -> ArchitectureReport:
    """Pick the architecture style by priority and list the layers present."""
    ctx = ArchitectureContext(paths=paths, dependencies=[d.lower() for d in dependencies], flags=flags)

    style = next(
        (style for applies, style in ARCHITECTURE_RULES if applies(ctx)),
        ArchitectureStyle.MONOLITH,
    )

    layers = [
        rule.result for rule in LAYER_RULES
        if rule_hits_any(rule, paths) or (rule.result == "Presentation" and flags.has_client)
    ]

    return ArchitectureReport(style=style, layers=layers, description=ARCHITECTURE_DESCRIPTIONS[style])
