"""
Configuration file templates

Renders the four files Wowza Streaming Engine reads for one application:
Application.xml, publish.password and the two alias maps. Rendering is plain
string interpolation; `${...}` tokens in the output are Wowza variables and
are written literally.
"""

import posixpath
import re
from typing import List, Tuple

from wowzadeploy.constants import (
    ALIAS_MAP_PLAY_FILE,
    ALIAS_MAP_STREAM_FILE,
    ALIAS_MAP_TARGET,
    APPLICATION_XML,
    DEFAULT_STREAMING_HOME,
    PUBLISH_PASSWORD_FILE,
)
from wowzadeploy.models.deployment import DeploymentSpec, RemoteFile


def render_application_xml(
    name: str,
    host_address: str,
    max_bitrate: int,
    max_viewers: int,
    storage_dir: str = None,
) -> str:
    """
    Render Application.xml for a live application.

    Bitrate is written to both limitPublishedStreamBandwidthMaxBitrate and
    MaxBitrate, viewers to both limitStreamViewersMaxViewers and
    securityPlayMaximumConnections; each pair feeds a different module.

    Args:
        name: Application name
        host_address: Server IP advertised as WebRTC ICE candidate
        max_bitrate: Maximum published bitrate (kbps)
        max_viewers: Maximum simultaneous viewers
        storage_dir: Streams storage directory (defaults to /home/streaming/<name>)

    Returns:
        XML document text
    """
    if storage_dir is None:
        storage_dir = posixpath.join(DEFAULT_STREAMING_HOME, name)

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<Root version="1">
	<Application>
		<Name>{name}</Name>
		<AppType>Live</AppType>
		<Description>Default application for live streaming created when Wowza Streaming Engine is installed. Use this application with its default configuration or modify the configuration as needed. You can also copy it to create another live application.</Description>
		<!-- Uncomment to set application level timeout values
		<ApplicationTimeout>60000</ApplicationTimeout>
		<PingTimeout>12000</PingTimeout>
		<ValidationFrequency>800</ValidationFrequency>
		<MaximumPendingWriteBytes>0</MaximumPendingWriteBytes>
		<MaximumSetBufferTime>60000</MaximumSetBufferTime>
		<MaximumStorageDirDepth>25</MaximumStorageDirDepth>
		-->
		<Connections>
			<AutoAccept>true</AutoAccept>
			<AllowDomains></AllowDomains>
		</Connections>
		<!--
			StorageDir path variables
			${{com.wowza.wms.AppHome}} - Application home directory
			${{com.wowza.wms.ConfigHome}} - Configuration home directory
			${{com.wowza.wms.context.VHost}} - Virtual host name
			${{com.wowza.wms.context.VHostConfigHome}} - Virtual host config directory
			${{com.wowza.wms.context.Application}} - Application name
			${{com.wowza.wms.context.ApplicationInstance}} - Application instance name
		-->
		<Streams>
			<StreamType>live</StreamType>
			<StorageDir>{storage_dir}</StorageDir>
			<KeyDir>${{com.wowza.wms.context.VHostConfigHome}}/keys</KeyDir>
			<!-- LiveStreamPacketizers (separate with commas): cupertinostreamingpacketizer, smoothstreamingpacketizer, sanjosestreamingpacketizer, mpegdashstreamingpacketizer, cupertinostreamingrepeater, smoothstreamingrepeater, sanjosestreamingrepeater, mpegdashstreamingrepeater -->
			<LiveStreamPacketizers>cupertinostreamingpacketizer, mpegdashstreamingpacketizer, sanjosestreamingpacketizer, smoothstreamingpacketizer</LiveStreamPacketizers>
			<!-- Properties defined here will override any properties defined in conf/Streams.xml for any streams types loaded by this application -->
			<Properties>
			</Properties>
		</Streams>
		<Transcoder>
			<!-- To turn on transcoder set to: transcoder -->
			<LiveStreamTranscoder></LiveStreamTranscoder>
			<!-- [templatename].xml or ${{SourceStreamName}}.xml -->
			<Templates>${{SourceStreamName}}.xml,transrate.xml</Templates>
			<ProfileDir>${{com.wowza.wms.context.VHostConfigHome}}/transcoder/profiles</ProfileDir>
			<TemplateDir>${{com.wowza.wms.context.VHostConfigHome}}/transcoder/templates</TemplateDir>
			<Properties>
			</Properties>
		</Transcoder>
		<DVR>
			<!-- As a single server or as an origin, use dvrstreamingpacketizer in LiveStreamPacketizers above -->
			<!-- Or, in an origin-edge configuration, edges use dvrstreamingrepeater in LiveStreamPacketizers above -->
			<!-- As an origin, also add dvrchunkstreaming to HTTPStreamers below -->
			<!-- If this is a dvrstreamingrepeater, define Application/Repeater/OriginURL to point back to the origin -->
			<!-- To turn on DVR recording set Recorders to dvrrecorder.  This works with dvrstreamingpacketizer  -->
			<Recorders></Recorders>
			<!-- As a single server or as an origin, set the Store to dvrfilestorage-->
			<!-- edges should have this empty -->
			<Store></Store>
			<!--  Window Duration is length of live DVR window in seconds.  0 means the window is never trimmed. -->
			<WindowDuration>0</WindowDuration>
			<!-- Storage Directory is top level location where dvr is stored.  e.g. c:/temp/dvr -->
			<StorageDir>${{com.wowza.wms.context.VHostConfigHome}}/dvr</StorageDir>
			<!-- valid ArchiveStrategy values are append, version, delete -->
			<ArchiveStrategy>append</ArchiveStrategy>
			<!-- Properties for DVR -->
			<Properties>
			</Properties>
		</DVR>
		<TimedText>
			<!-- VOD caption providers (separate with commas): vodcaptionprovidermp4_3gpp, vodcaptionproviderttml, vodcaptionproviderwebvtt,  vodcaptionprovidersrt, vodcaptionproviderscc -->
			<VODTimedTextProviders></VODTimedTextProviders>
			<!-- Properties for TimedText -->
			<Properties>
			</Properties>
		</TimedText>
		<!-- HTTPStreamers (separate with commas): cupertinostreaming, smoothstreaming, sanjosestreaming, mpegdashstreaming, dvrchunkstreaming -->
		<HTTPStreamers>cupertinostreaming, smoothstreaming, sanjosestreaming, mpegdashstreaming</HTTPStreamers>
		<MediaCache>
			<MediaCacheSourceList></MediaCacheSourceList>
		</MediaCache>
		<SharedObjects>
			<StorageDir>${{com.wowza.wms.context.VHostConfigHome}}/applications/${{com.wowza.wms.context.Application}}/sharedobjects/${{com.wowza.wms.context.ApplicationInstance}}</StorageDir>
		</SharedObjects>
		<Client>
			<IdleFrequency>-1</IdleFrequency>
			<Access>
				<StreamReadAccess>*</StreamReadAccess>
				<StreamWriteAccess>*</StreamWriteAccess>
				<StreamAudioSampleAccess></StreamAudioSampleAccess>
				<StreamVideoSampleAccess></StreamVideoSampleAccess>
				<SharedObjectReadAccess>*</SharedObjectReadAccess>
				<SharedObjectWriteAccess>*</SharedObjectWriteAccess>
			</Access>
		</Client>
		<RTP>
			<!-- RTP/Authentication/[type]Methods defined in Authentication.xml. Default setup includes; none, basic, digest -->
			<Authentication>
				<PublishMethod>digest</PublishMethod>
				<PlayMethod>none</PlayMethod>
			</Authentication>
			<!-- RTP/AVSyncMethod. Valid values are: senderreport, systemclock, rtptimecode -->
			<AVSyncMethod>senderreport</AVSyncMethod>
			<MaxRTCPWaitTime>12000</MaxRTCPWaitTime>
			<IdleFrequency>75</IdleFrequency>
			<RTSPSessionTimeout>90000</RTSPSessionTimeout>
			<RTSPMaximumPendingWriteBytes>0</RTSPMaximumPendingWriteBytes>
			<RTSPBindIpAddress></RTSPBindIpAddress>
			<RTSPConnectionIpAddress>0.0.0.0</RTSPConnectionIpAddress>
			<RTSPOriginIpAddress>127.0.0.1</RTSPOriginIpAddress>
			<IncomingDatagramPortRanges>*</IncomingDatagramPortRanges>
			<!-- Properties defined here will override any properties defined in conf/RTP.xml for any depacketizers loaded by this application -->
			<Properties>
			</Properties>
		</RTP>
		<WebRTC>
			<EnablePublish>true</EnablePublish>
			<EnablePlay>true</EnablePlay>
			<EnableQuery>true</EnableQuery>
			<IceCandidateIpAddresses>{host_address},tcp,1935</IceCandidateIpAddresses>
			<UDPBindAddress></UDPBindAddress>
			<PreferredCodecsAudio>opus,vorbis,pcmu,pcma</PreferredCodecsAudio>
			<PreferredCodecsVideo>vp8,h264</PreferredCodecsVideo>
			<DebugLog>false</DebugLog>
			<Properties>
			</Properties>
		</WebRTC>
		<MediaCaster>
			<RTP>
				<RTSP>
					<!-- udp, interleave -->
					<RTPTransportMode>interleave</RTPTransportMode>
				</RTSP>
			</RTP>
			<StreamValidator>
				<Enable>true</Enable>
				<ResetNameGroups>true</ResetNameGroups>
				<StreamStartTimeout>20000</StreamStartTimeout>
				<StreamTimeout>12000</StreamTimeout>
				<VideoStartTimeout>0</VideoStartTimeout>
				<VideoTimeout>0</VideoTimeout>
				<AudioStartTimeout>0</AudioStartTimeout>
				<AudioTimeout>0</AudioTimeout>
				<VideoTCToleranceEnable>false</VideoTCToleranceEnable>
				<VideoTCPosTolerance>3000</VideoTCPosTolerance>
				<VideoTCNegTolerance>-500</VideoTCNegTolerance>
				<AudioTCToleranceEnable>false</AudioTCToleranceEnable>
				<AudioTCPosTolerance>3000</AudioTCPosTolerance>
				<AudioTCNegTolerance>-500</AudioTCNegTolerance>
				<DataTCToleranceEnable>false</DataTCToleranceEnable>
				<DataTCPosTolerance>3000</DataTCPosTolerance>
				<DataTCNegTolerance>-500</DataTCNegTolerance>
				<AVSyncToleranceEnable>false</AVSyncToleranceEnable>
				<AVSyncTolerance>1500</AVSyncTolerance>
				<DebugLog>false</DebugLog>
			</StreamValidator>
			<!-- Properties defined here will override any properties defined in conf/MediaCasters.xml for any MediaCasters loaded by this applications -->
			<Properties>
			</Properties>
		</MediaCaster>
		<MediaReader>
			<!-- Properties defined here will override any properties defined in conf/MediaReaders.xml for any MediaReaders loaded by this applications -->
			<Properties>
			</Properties>
		</MediaReader>
		<MediaWriter>
			<!-- Properties defined here will override any properties defined in conf/MediaWriter.xml for any MediaWriter loaded by this applications -->
			<Properties>
			</Properties>
		</MediaWriter>
		<LiveStreamPacketizer>
			<!-- Properties defined here will override any properties defined in conf/LiveStreamPacketizers.xml for any LiveStreamPacketizers loaded by this applications -->
			<Properties>
			</Properties>
		</LiveStreamPacketizer>
		<HTTPStreamer>
			<!-- Properties defined here will override any properties defined in conf/HTTPStreamers.xml for any HTTPStreamer loaded by this applications -->
			<Properties>
                <Property>
                <Name>cupertinoPlaylistProgramId</Name>
                <Value>1</Value>
                <Type>Integer</Type>
                </Property>
			</Properties>
		</HTTPStreamer>
		<HTTPProvider>
	<BaseClass>com.wowza.wms.plugin.HTTPStreamControl</BaseClass>
	<RequestFilters>streamcontrol*</RequestFilters>
	<AuthenticationMethod>none</AuthenticationMethod>
</HTTPProvider>
		<Manager>
			<!-- Properties defined are used by the Manager -->
			<Properties>
			</Properties>
		</Manager>
		<Repeater>
			<OriginURL></OriginURL>
			<QueryString><![CDATA[]]></QueryString>
		</Repeater>
		<StreamRecorder>
			<Properties>
			</Properties>
		</StreamRecorder>
		<Modules>
			<Module>
				<Name>base</Name>
				<Description>Base</Description>
				<Class>com.wowza.wms.module.ModuleCore</Class>
			</Module>
			<Module>
				<Name>logging</Name>
				<Description>Client Logging</Description>
				<Class>com.wowza.wms.module.ModuleClientLogging</Class>
			</Module>
			<Module>
				<Name>flvplayback</Name>
				<Description>FLVPlayback</Description>
				<Class>com.wowza.wms.module.ModuleFLVPlayback</Class>
			</Module>
			<Module>
				<Name>ModuleCoreSecurity</Name>
				<Description>Core Security Module for Applications</Description>
				<Class>com.wowza.wms.security.ModuleCoreSecurity</Class>
			</Module>
			<Module>
				<Name>streamPublisher</Name>
				<Description>Playlists</Description>
				<Class>com.wowza.wms.plugin.streampublisher.ModuleStreamPublisher</Class>
			</Module>
           <Module>
				<Name>ModuleLoopUntilLive</Name>
				<Description>ModuleLoopUntilLive</Description>
				<Class>com.wowza.wms.plugin.streampublisher.ModuleLoopUntilLive</Class>
			</Module>
			<Module>
                <Name>ModuleLimitPublishedStreamBandwidth</Name>
                <Description>Monitors limit of published stream bandwidth.</Description>
                <Class>com.wowza.wms.plugin.ModuleLimitPublishedStreamBandwidth</Class>
            </Module>
			<Module>
                    <Name>ModulePushPublish</Name>
                    <Description>ModulePushPublish</Description>
                    <Class>com.wowza.wms.pushpublish.module.ModulePushPublish</Class>
            </Module>
		</Modules>
		<!-- Properties defined here will be added to the IApplication.getProperties() and IApplicationInstance.getProperties() collections -->
		<Properties>
			<Property>
				<Name>limitPublishedStreamBandwidthMaxBitrate</Name>
				<Value>{max_bitrate}</Value>
				<Type>Integer</Type>
			</Property>
			<Property>
				<Name>limitPublishedStreamBandwidthDebugLog</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>MaxBitrate</Name>
				<Value>{max_bitrate}</Value>
				<Type>Integer</Type>
			</Property>
			<Property>
				<Name>StreamMonitorLogging</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>limitStreamViewersMaxViewers</Name>
				<Value>{max_viewers}</Value>
				<Type>Integer</Type>
			</Property>
			<Property>
				<Name>securityPlayMaximumConnections</Name>
				<Value>{max_viewers}</Value>
				<Type>Integer</Type>
			</Property>
			<Property>
				<Name>securityPublishRequirePassword</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>streamPublisherSmilFile</Name>
				<Value>playlists_agendamentos.smil</Value>
				<Type>String</Type>
			</Property>
			<Property>
				<Name>streamPublisherPassMetaData</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>streamPublisherSwitchLog</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>securityPublishBlockDuplicateStreamNames</Name>
				<Value>false</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>securityPublishPasswordFile</Name>
				<Value>${{com.wowza.wms.context.VHostConfigHome}}/conf/${{com.wowza.wms.context.Application}}/publish.password</Value>
				<Type>String</Type>
			</Property>
			<Property>
				<Name>loopUntilLiveSourceStreams</Name>
				<Value>live</Value>
				<Type>String</Type>
			</Property>
			<Property>
				<Name>loopUntilLiveOutputStreams</Name>
				<Value>{name}</Value>
				<Type>String</Type>
			</Property>
			<Property>
				<Name>loopUntilLiveReloadEntirePlaylist</Name>
				<Value>true</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
				<Name>loopUntilLiveHandleMediaCasters</Name>
				<Value>false</Value>
				<Type>Boolean</Type>
			</Property>
			<Property>
                <Name>pushPublishMapPath</Name>
                <Value>${{com.wowza.wms.context.VHostConfigHome}}/conf/${{com.wowza.wms.context.Application}}/PushPublishMap.txt</Value>
                <Type>String</Type>
            </Property>
		</Properties>
	</Application>
</Root>"""


def render_publish_password(name: str, password: str) -> str:
    """Render publish.password: the app credential plus the per-stream wildcard line."""
    return f"{name}={password}\n*=${{Stream.Name}}"


def render_alias_map(name: str) -> str:
    """Render an alias map entry (same content for play and stream maps)."""
    return f"{name} {ALIAS_MAP_TARGET}"


def render_files(
    spec: DeploymentSpec, app_dir: str, storage_dir: str = None
) -> List[RemoteFile]:
    """
    Render all four configuration files for a deployment.

    Args:
        spec: Deployment parameters
        app_dir: Remote application directory
        storage_dir: Streams storage directory written into Application.xml

    Returns:
        RemoteFile list (Application.xml, publish.password, play and stream alias maps)
    """
    alias_map = render_alias_map(spec.name)
    return [
        RemoteFile(
            posixpath.join(app_dir, APPLICATION_XML),
            render_application_xml(
                spec.name,
                spec.host_address,
                spec.max_bitrate,
                spec.max_viewers,
                storage_dir=storage_dir,
            ),
        ),
        RemoteFile(
            posixpath.join(app_dir, PUBLISH_PASSWORD_FILE),
            render_publish_password(spec.name, spec.publish_password),
        ),
        RemoteFile(posixpath.join(app_dir, ALIAS_MAP_PLAY_FILE), alias_map),
        RemoteFile(posixpath.join(app_dir, ALIAS_MAP_STREAM_FILE), alias_map),
    ]


def patch_property(xml: str, property_name: str, value) -> Tuple[str, int]:
    """
    Replace the <Value> that follows <Name>property_name</Name>.

    Every occurrence is rewritten. Whitespace between the two tags and the
    rest of the document are left untouched.

    Args:
        xml: Application.xml text
        property_name: Property <Name> to look for
        value: New value

    Returns:
        Tuple of (patched_xml, replacements)
    """
    pattern = re.compile(
        r"(<Name>" + re.escape(property_name) + r"</Name>\s*<Value>)[^<]*(</Value>)"
    )
    return pattern.subn(lambda m: f"{m.group(1)}{value}{m.group(2)}", xml)
