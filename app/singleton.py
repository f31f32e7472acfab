from .services.ai import VidyaNavClient

vidyanav = VidyaNavClient()

def get_vidyanav() -> VidyaNavClient:
    return vidyanav
