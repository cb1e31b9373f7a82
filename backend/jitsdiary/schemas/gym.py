from .common import ReadText, RecordRead

class GymRead(RecordRead):
    name: str
    location: ReadText = None
