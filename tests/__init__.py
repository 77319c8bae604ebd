# Ensure no dependencies from the environment or a local .env file are probed during tests
import os
os.environ['HEALTH_HTTP_DEPENDENCIES'] = ''
os.environ['HEALTH_DYNAMODB_TABLE'] = ''
os.environ['HEALTH_S3_BUCKET'] = ''
os.environ['HEALTH_NON_CRITICAL'] = ''
os.environ['API_PREFIX'] = ''
