from app.common.controller import BaseController


def get_controllers() -> list[type[BaseController]]:
    from app.auth.auth_controller import AuthController
    from app.profile.profile_controller import ProfileController

    return [AuthController, ProfileController]
