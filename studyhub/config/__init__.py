from studyhub.config.settings import settings
