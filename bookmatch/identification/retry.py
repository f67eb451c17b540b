"""
Retry state machine for API queries.

Each strategy execution owns one RetryState. The delay before the next
attempt is a value on the state, so the caller decides how to wait
(and tests can observe it without sleeping).
"""

from dataclasses import dataclass
from typing import Optional

from bookmatch.exceptions import BookMatchError


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff: base ** attempt seconds."""
    
    max_attempts: int = 3
    backoff_base: float = 2.0
    
    def delay_after(self, attempt: int) -> float:
        """Delay after a failed attempt (1-based): 2s, 4s, 8s..."""
        return self.backoff_base ** attempt


@dataclass
class RetryState:
    """
    Attempt bookkeeping for one strategy execution.
    
    States:
        running   - an attempt may be made (attempt < max_attempts)
        waiting   - last attempt failed transiently, next_delay is set
        exhausted - retryable failures used every attempt
        aborted   - a non-retryable failure ended the loop
        succeeded - an attempt returned a result
    """
    
    policy: RetryPolicy
    attempt: int = 0
    last_error: Optional[BookMatchError] = None
    next_delay: Optional[float] = None
    status: str = "running"
    
    @property
    def can_attempt(self) -> bool:
        return self.status in ("running", "waiting") and self.attempt < self.policy.max_attempts
    
    def begin_attempt(self) -> int:
        """Start the next attempt and return its 1-based number."""
        self.attempt += 1
        self.next_delay = None
        self.status = "running"
        return self.attempt
    
    def record_success(self) -> None:
        self.status = "succeeded"
        self.last_error = None
    
    def record_failure(self, error: BookMatchError) -> bool:
        """
        Record a failed attempt.
        
        Args:
            error: Error raised by the attempt
            
        Returns:
            True if another attempt should follow after next_delay
        """
        self.last_error = error
        
        if not error.retryable:
            self.status = "aborted"
            return False
        
        if self.attempt >= self.policy.max_attempts:
            self.status = "exhausted"
            return False
        
        self.next_delay = self.policy.delay_after(self.attempt)
        self.status = "waiting"
        return True
