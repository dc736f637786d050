"""Test doubles for the object store."""
import threading

from inspections.services.storage import S3BlobStore


class StubS3Client:
    """Records the boto3 S3 calls the blob store makes.

    Keys listed in ``fail_delete`` make ``delete_object`` raise, the way
    a permissions or network error would.
    """

    def __init__(self, fail_delete=()):
        self.objects = {}
        self.deleted = []
        self.presigned = []
        self.fail_delete = set(fail_delete)
        self._lock = threading.Lock()

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self.objects[Key] = {'Bucket': Bucket, 'Body': Body, 'ContentType': ContentType}
        return {'ETag': '"stub"'}

    def delete_object(self, Bucket, Key):
        with self._lock:
            self.deleted.append(Key)
        if Key in self.fail_delete:
            raise RuntimeError(f'AccessDenied: {Key}')
        self.objects.pop(Key, None)
        return {}

    def generate_presigned_url(self, ClientMethod, Params=None, ExpiresIn=3600):
        params = dict(Params or {})
        self.presigned.append((ClientMethod, params, ExpiresIn))
        return f"https://{params['Bucket']}.s3.amazonaws.com/{params['Key']}?X-Amz-Expires={ExpiresIn}&X-Amz-Signature=stub"


def make_store(client=None, bucket='test-bucket', prefix=''):
    return S3BlobStore(bucket=bucket, region='ap-south-1', prefix=prefix, client=client or StubS3Client())
