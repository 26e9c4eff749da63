"""
Data models for the Zencoder client.

Outgoing models (JobSpec, Output, Stream) serialize to the job-submission
payload. Incoming models (NotificationPayload and its parts) describe the
body the service posts to a notification URL once a job finishes.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .utils import compact


@dataclass
class Stream:
    """One rendition referenced by a playlist output."""
    source: str
    path: str
    bandwidth: Optional[int] = None
    resolution: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "source": self.source,
            "path": self.path,
            "bandwidth": self.bandwidth,
            "resolution": self.resolution
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stream":
        if not isinstance(data, dict) or not data.get('source') or not data.get('path'):
            raise ValueError(f"Stream must be an object with 'source' and 'path' fields, got {data!r}")
        return cls(
            source=data['source'],
            path=data['path'],
            bandwidth=data.get('bandwidth'),
            resolution=data.get('resolution')
        )


@dataclass
class Output:
    """
    One encoding requested for the job input.

    ``url`` is the delivery location; ``credentials`` names credentials
    stored with the service for writing to that location. ``headers`` are
    applied to the stored file (e.g. Cache-Control, Access-Control-Allow-Origin).
    """
    type: Optional[str] = None
    format: Optional[str] = None
    url: Optional[str] = None
    credentials: Optional[str] = None
    label: Optional[str] = None
    video_bitrate: Optional[int] = None
    height: Optional[int] = None
    width: Optional[int] = None
    streaming_delivery_format: Optional[str] = None
    public: bool = False
    notifications: List[str] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    streams: List[Stream] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert output to its payload form, dropping unset fields."""
        return compact({
            "type": self.type,
            "format": self.format,
            "url": self.url,
            "credentials": self.credentials,
            "label": self.label,
            "video_bitrate": self.video_bitrate,
            "height": self.height,
            "width": self.width,
            "streaming_delivery_format": self.streaming_delivery_format,
            "public": self.public,
            "notifications": list(self.notifications),
            "headers": dict(self.headers),
            "streams": [stream.to_dict() for stream in self.streams]
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Output":
        if not isinstance(data, dict):
            raise ValueError(f"Output must be an object, got {type(data).__name__}")
        return cls(
            type=data.get('type'),
            format=data.get('format'),
            url=data.get('url'),
            credentials=data.get('credentials'),
            label=data.get('label'),
            video_bitrate=data.get('video_bitrate'),
            height=data.get('height'),
            width=data.get('width'),
            streaming_delivery_format=data.get('streaming_delivery_format'),
            public=bool(data.get('public', False)),
            notifications=list(data.get('notifications') or []),
            headers=dict(data.get('headers') or {}),
            streams=[Stream.from_dict(s) for s in data.get('streams') or []]
        )


@dataclass
class JobSpec:
    """
    A job submission: one input and the outputs to encode it to.

    Fields left at their default are omitted from the payload entirely.
    """
    input: str
    outputs: List[Output] = field(default_factory=list)
    notifications: List[str] = field(default_factory=list)
    test: bool = False
    region: Optional[str] = None
    pass_through: Optional[str] = None
    private: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert job to its payload form, dropping unset fields."""
        return compact({
            "input": self.input,
            "outputs": [output.to_dict() for output in self.outputs],
            "notifications": list(self.notifications),
            "test": self.test,
            "region": self.region,
            "pass_through": self.pass_through,
            "private": self.private
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobSpec":
        """
        Build a job from a dictionary, e.g. a parsed job file.

        Raises:
            ValueError: If the data is not an object, the 'input' field is
                missing, or an output or stream is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Job must be an object, got {type(data).__name__}")
        if not data.get('input'):
            raise ValueError("Job must have an 'input' field")

        return cls(
            input=data['input'],
            outputs=[Output.from_dict(o) for o in data.get('outputs') or []],
            notifications=list(data.get('notifications') or []),
            test=bool(data.get('test', False)),
            region=data.get('region'),
            pass_through=data.get('pass_through'),
            private=bool(data.get('private', False))
        )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


@dataclass
class ThumbnailImage:
    url: str
    format: Optional[str] = None
    dimensions: Optional[str] = None
    file_size_bytes: Optional[int] = None


@dataclass
class Thumbnail:
    """A labelled set of thumbnail images produced for an output."""
    label: Optional[str]
    images: List[ThumbnailImage] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Thumbnail":
        return cls(
            label=data.get('label'),
            images=[
                ThumbnailImage(
                    url=image['url'],
                    format=image.get('format'),
                    dimensions=image.get('dimensions'),
                    file_size_bytes=image.get('file_size_bytes')
                )
                for image in data.get('images') or []
            ]
        )


@dataclass
class MediaFile:
    """Encoding metrics reported for a job's input or one of its outputs."""
    id: Optional[int] = None
    label: Optional[str] = None
    url: Optional[str] = None
    state: Optional[str] = None
    format: Optional[str] = None
    duration_in_ms: Optional[int] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    video_bitrate_in_kbps: Optional[int] = None
    audio_bitrate_in_kbps: Optional[int] = None
    total_bitrate_in_kbps: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[float] = None
    channels: Optional[str] = None
    audio_sample_rate: Optional[int] = None
    md5_checksum: Optional[str] = None
    file_size_in_bytes: Optional[int] = None
    thumbnails: List[Thumbnail] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MediaFile":
        return cls(
            id=data.get('id'),
            label=data.get('label'),
            url=data.get('url'),
            state=data.get('state'),
            format=data.get('format'),
            duration_in_ms=data.get('duration_in_ms'),
            video_codec=data.get('video_codec'),
            audio_codec=data.get('audio_codec'),
            video_bitrate_in_kbps=data.get('video_bitrate_in_kbps'),
            audio_bitrate_in_kbps=data.get('audio_bitrate_in_kbps'),
            total_bitrate_in_kbps=data.get('total_bitrate_in_kbps'),
            width=data.get('width'),
            height=data.get('height'),
            frame_rate=data.get('frame_rate'),
            channels=data.get('channels'),
            audio_sample_rate=data.get('audio_sample_rate'),
            md5_checksum=data.get('md5_checksum'),
            file_size_in_bytes=data.get('file_size_in_bytes'),
            thumbnails=[Thumbnail.from_dict(t) for t in data.get('thumbnails') or []]
        )


@dataclass
class NotificationJob:
    """Job metadata carried in a notification."""
    id: int
    state: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    pass_through: Optional[str] = None
    test: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationJob":
        return cls(
            id=data['id'],
            state=data['state'],
            created_at=_parse_timestamp(data.get('created_at')),
            updated_at=_parse_timestamp(data.get('updated_at')),
            submitted_at=_parse_timestamp(data.get('submitted_at')),
            pass_through=data.get('pass_through'),
            test=bool(data.get('test', False))
        )


@dataclass
class NotificationPayload:
    """
    Body the service posts to a notification URL.

    The client never sends this; it is provided so webhook receivers can
    work with a typed object instead of the raw document.
    """
    job: NotificationJob
    outputs: List[MediaFile] = field(default_factory=list)
    input: Optional[MediaFile] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NotificationPayload":
        if 'job' not in data:
            raise ValueError("Notification must have a 'job' field")

        # Per-output notifications carry a single 'output' object
        raw_outputs = data.get('outputs')
        if raw_outputs is None and data.get('output'):
            raw_outputs = [data['output']]

        return cls(
            job=NotificationJob.from_dict(data['job']),
            outputs=[MediaFile.from_dict(o) for o in raw_outputs or []],
            input=MediaFile.from_dict(data['input']) if data.get('input') else None
        )


def parse_notification(body: Union[str, bytes, Dict[str, Any]]) -> NotificationPayload:
    """
    Parse a notification body received by a webhook.

    Args:
        body: Raw JSON text or an already decoded dictionary

    Returns:
        NotificationPayload object

    Raises:
        ValueError: If the body is not valid JSON or has no job section
    """
    if isinstance(body, (str, bytes)):
        body = json.loads(body)
    return NotificationPayload.from_dict(body)
