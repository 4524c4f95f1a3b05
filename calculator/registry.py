from typing import Dict, Optional

from loguru import logger

from auth.service import SIGNED_IN, SIGNED_OUT, AuthSession
from calculator.controller import CalculatorController
from preferences.service import fetch_user_settings


class CalculatorRegistry:
    def __init__(self):
        self.controllers: Dict[str, CalculatorController] = {}

    def get(self, client_id: str) -> CalculatorController:
        if client_id not in self.controllers:
            self.controllers[client_id] = CalculatorController()
        return self.controllers[client_id]

    def on_auth_event(self, event: str, client_id: str, session: Optional[AuthSession]) -> None:
        controller = self.get(client_id)

        if event == SIGNED_IN and session is not None:
            try:
                stored = fetch_user_settings(session.user_id, session.access_token)
            except Exception as e:
                # Keep working with the current inputs
                logger.error(f"Could not load settings for {session.email}: {e}")
                stored = None
            controller.attach_session(session, stored)

        elif event == SIGNED_OUT:
            controller.detach_session()
            logger.info(f"Detached session from client {client_id}")


registry = CalculatorRegistry()
