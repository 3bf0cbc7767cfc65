from typing import Dict, List, Optional
from dataclasses import dataclass, field


FEATURE_TEXT = '''Feature: My Feature
    Scenario: Scenario 1
        Given the first setup
        When the first action
        Then the first result
        But not the other first result
    Scenario: Scenario 2
        Given the second setup
        When the second action
        Then the second result
        And the other second result
    Scenario: Scenario 3
        * the third setup
        When     the third action has leading spaces
        When the third action has trailing spaces   
    This is ignored'''


@dataclass
class Context:
    was_called: bool = field(default=False)
    first_was_called: bool = field(default=False)
    second_was_called: bool = field(default=False)
    action_was_called: bool = field(default=False)
    set_up_was_called: bool = field(default=False)
    tear_down_was_called: bool = field(default=False)
    set_up_called_before_step: bool = field(default=False)
    times_run: int = field(default=0)
    captured: Optional[str] = field(default=None)
    data: Dict[str, List[Dict[str, str]]] = field(default_factory=dict)
    calls: List[str] = field(default_factory=list)
