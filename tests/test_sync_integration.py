"""
End-to-end sync tests against moto's CloudFormation backend.
"""

import json

import boto3
import pytest
from moto import mock_aws

from stack_sync.cloudformation.stack_manager import StackManager
from stack_sync.cloudformation.status import StackStatus
from stack_sync.config import SyncRequest
from stack_sync.errors import SourceNotFound
from stack_sync.sync import sync_stacks

TEMPLATE = {
    "AWSTemplateFormatVersion": "2010-09-09",
    "Parameters": {
        "Env": {"Type": "String"},
        "Size": {"Type": "String"},
    },
    "Resources": {"Topic": {"Type": "AWS::SNS::Topic"}},
}


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def cloudformation(aws_credentials):
    with mock_aws():
        client = boto3.client("cloudformation", region_name="us-east-1")
        client.create_stack(
            StackName="app-staging",
            TemplateBody=json.dumps(TEMPLATE),
            Parameters=[
                {"ParameterKey": "Env", "ParameterValue": "staging"},
                {"ParameterKey": "Size", "ParameterValue": "small"},
            ],
        )
        yield client


class TestSyncIntegration:
    """Test syncing stacks through boto3."""

    def test_create_then_update(self, cloudformation) -> None:
        """Test creating a target stack and then updating it."""
        manager = StackManager(region="us-east-1")
        sleeps = []

        stack = sync_stacks(
            SyncRequest(
                source_stack_name="app-staging",
                target_stack_name="app-prod",
                parameter_overrides={"Env": "prod"},
            ),
            stack_manager=manager,
            sleep=sleeps.append,
        )

        assert stack.name == "app-prod"
        assert stack.status is StackStatus.CREATE_COMPLETE
        assert stack.parameter_set == {"Env": "prod", "Size": "small"}

        stack = sync_stacks(
            SyncRequest(
                source_stack_name="app-staging",
                target_stack_name="app-prod",
                parameter_overrides={"Size": "large"},
            ),
            stack_manager=manager,
            sleep=sleeps.append,
        )

        assert stack.status is StackStatus.UPDATE_COMPLETE
        assert stack.parameter_set == {"Env": "staging", "Size": "large"}

    def test_template_copied(self, cloudformation) -> None:
        """Test that the target runs the source's template."""
        manager = StackManager(region="us-east-1")

        sync_stacks(
            SyncRequest(
                source_stack_name="app-staging",
                target_stack_name="app-prod",
                parameter_overrides={},
            ),
            stack_manager=manager,
            sleep=lambda seconds: None,
        )

        template = json.loads(manager.read_template("app-prod"))
        assert template["Resources"] == TEMPLATE["Resources"]

    def test_missing_source(self, cloudformation) -> None:
        """Test syncing from a stack that does not exist."""
        with pytest.raises(SourceNotFound):
            sync_stacks(
                SyncRequest(
                    source_stack_name="missing",
                    target_stack_name="app-prod",
                    parameter_overrides={},
                ),
                stack_manager=StackManager(region="us-east-1"),
                sleep=lambda seconds: None,
            )
