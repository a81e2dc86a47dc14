"""
Shared pytest fixtures for rundeck-spine tests.

Provides sample job documents and a stub fetcher standing in for the
external fetch collaborator.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from rundeck_spine.core.logging import clear_context


SUMMARY_DOC = b"""<jobs count="2">
  <job id="a1b2">
    <name>nightly-backup</name>
    <group>ops/db</group>
    <project>infra</project>
    <description>Dump and ship the database</description>
  </job>
  <job id="c3d4">
    <name>rotate-logs</name>
    <group>ops</group>
    <project>infra</project>
  </job>
</jobs>"""

DETAIL_DOC = b"""<joblist>
  <job>
    <id>a1b2</id>
    <name>nightly-backup</name>
    <group>ops/db</group>
    <context>
      <project>infra</project>
      <options>
        <preserveOrder>true</preserveOrder>
        <option value="full" values="full,incremental" enforcedvalues="true" required="true"
                multivalued="false" delimeter="" secure="false" valueExposed="true">
          <description>Backup mode</description>
        </option>
        <option valuesUrl="http://example.com/targets" regex="^[a-z]+$" enforcedvalues="false"
                required="false" multivalued="true" delimeter="," secure="true" valueExposed="false"/>
      </options>
    </context>
    <description>Dump and ship the database</description>
    <loglevel>INFO</loglevel>
    <multipleExecutions>false</multipleExecutions>
    <dispatch>
      <threadcount>4</threadcount>
      <keepgoing>true</keepgoing>
      <rankAttribute>nodename</rankAttribute>
      <rankOrder>ascending</rankOrder>
    </dispatch>
    <sequence keepgoing="false" strategy="node-first">
      <command>
        <exec>pg_dump -Fc app &gt; /tmp/app.dump</exec>
      </command>
      <command>
        <script><![CDATA[#!/bin/sh
echo done]]></script>
      </command>
      <command>
        <scriptfile>/opt/ship.sh</scriptfile>
        <scriptargs>--dest s3</scriptargs>
      </command>
      <command>
        <jobref name="notify" group="ops" nodeStep="true">
          <arg line="-x value"/>
        </jobref>
      </command>
      <command>
        <step-plugin type="http-request">
          <configuration>
            <entry key="timeout" value="30"/>
            <entry key="retries" value="3"/>
          </configuration>
        </step-plugin>
      </command>
      <command>
        <node-step-plugin type="copyfile"/>
      </command>
    </sequence>
    <nodefilters>
      <excludeprecedence>true</excludeprecedence>
      <filter>tags: db</filter>
    </nodefilters>
  </job>
</joblist>"""


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Ensure no logging context leaks between tests."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def summary_doc() -> bytes:
    return SUMMARY_DOC


@pytest.fixture
def detail_doc() -> bytes:
    return DETAIL_DOC


@pytest.fixture
def fetcher() -> Any:
    """Stub fetch collaborator; set ``fetcher.fetch.return_value`` per test."""
    return MagicMock(name="JobFetcher")
