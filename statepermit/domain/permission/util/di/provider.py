"""DI provider for the permission domain."""

from dishka import Provider, from_context, provide

from statepermit.application.hook import TransitionHook
from statepermit.config import Config
from statepermit.domain.permission.port.checker import PermissionChecker
from statepermit.domain.permission.port.state_registry import StateRegistry
from statepermit.domain.permission.service.authorization import StateAuthorization
from statepermit.domain.permission.service.builder import RuleSetBuilder
from statepermit.domain.permission.service.evaluator import AuthorizationEvaluator
from statepermit.domain.permission.service.redirect import RedirectResolver
from statepermit.util.di.scope import Scope


class PermissionProvider(Provider):
    """DI provider for permission services and the transition hook."""

    config = from_context(provides=Config, scope=Scope.APP)
    registry = from_context(provides=StateRegistry, scope=Scope.APP)
    checker = from_context(provides=PermissionChecker, scope=Scope.APP)

    hook = provide(TransitionHook, scope=Scope.ATTEMPT)

    @provide(scope=Scope.APP)
    def get_builder(self, config: Config) -> RuleSetBuilder:
        """Provide RuleSetBuilder."""
        return RuleSetBuilder(_default_redirect_key=config.authorization.default_redirect_key)

    @provide(scope=Scope.ATTEMPT)
    def get_evaluator(self, config: Config, checker: PermissionChecker) -> AuthorizationEvaluator:
        """Provide AuthorizationEvaluator bound to the configured backend."""
        return AuthorizationEvaluator(
            _checker=checker,
            _check_timeout=config.authorization.check_timeout,
        )

    @provide(scope=Scope.ATTEMPT)
    def get_resolver(self, config: Config) -> RedirectResolver:
        """Provide RedirectResolver."""
        return RedirectResolver(
            _default_key=config.authorization.default_redirect_key,
            _max_depth=config.authorization.max_redirect_depth,
        )

    @provide(scope=Scope.ATTEMPT)
    def get_state_authorization(
        self,
        registry: StateRegistry,
        builder: RuleSetBuilder,
        evaluator: AuthorizationEvaluator,
    ) -> StateAuthorization:
        """Provide StateAuthorization."""
        return StateAuthorization(_registry=registry, _builder=builder, _evaluator=evaluator)
