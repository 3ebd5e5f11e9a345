import warnings

# Suppress botocore DeprecationWarning messages (datetime.utcnow on Python 3.12+).
# These clutter the interactive prompt output.
warnings.filterwarnings("ignore", category=DeprecationWarning, module="botocore")
warnings.filterwarnings("ignore", category=DeprecationWarning, module="boto3")
