"""
AWS CloudFormation generator — one parameterized stack template.

The environment is a stack parameter; production durability is driven
by the ``IsProd`` condition inside the template. Writes
``template.yaml`` and ``README.md`` into the IaC directory.
"""

from __future__ import annotations

import logging

from pipegen.core.models.settings import PRODUCTION_ENVIRONMENT
from pipegen.core.models.template import GeneratedFile
from pipegen.core.services.generation import GENERATED_HEADER
from pipegen.core.services.iac.base import InfrastructureGenerator, quoted
from pipegen.core.services.service_detection import (
    cloudformation_engine,
    default_port,
    engine_version,
)

logger = logging.getLogger(__name__)

_REDIS_PORT = 6379


class CloudFormationGenerator(InfrastructureGenerator):
    platform_id = "cloudformation"

    @property
    def platform_name(self) -> str:
        return "AWS CloudFormation"

    def render_template(self) -> str:
        name = self.project_slug
        database = self._services.get("database")
        cache = self._services.get("cache") == "redis"
        queue = self._services.get("queue") == "sqs"
        envs = ", ".join(quoted(e) for e in self._settings.environments)

        parameters = [f"""\
  Environment:
    Type: String
    AllowedValues: [{envs}]
    Description: Environment name"""]
        if database:
            parameters.append("""\
  DBInstanceClass:
    Type: String
    Default: db.t3.micro
    Description: Database instance class

  DBMasterUsername:
    Type: String
    Default: app_admin
    Description: Database master user name""")

        resources = [f"""\
  VPC:
    Type: AWS::EC2::VPC
    Properties:
      CidrBlock: 10.0.0.0/16
      EnableDnsHostnames: true
      EnableDnsSupport: true
      Tags:
        - Key: Name
          Value: !Sub {name}-${{Environment}}-vpc

  PrivateSubnet1:
    Type: AWS::EC2::Subnet
    Properties:
      VpcId: !Ref VPC
      CidrBlock: 10.0.1.0/24
      AvailabilityZone: !Select [0, !GetAZs '']

  PrivateSubnet2:
    Type: AWS::EC2::Subnet
    Properties:
      VpcId: !Ref VPC
      CidrBlock: 10.0.2.0/24
      AvailabilityZone: !Select [1, !GetAZs '']"""]

        outputs = ["""\
  VpcId:
    Description: VPC ID
    Value: !Ref VPC"""]

        if database:
            resources.append(self._database_resources(database))
            outputs.append("""\
  DatabaseEndpoint:
    Description: Database endpoint
    Value: !GetAtt Database.Endpoint.Address""")

        if self.needs_containers:
            resources.append(self._container_resources(name))
            outputs.append("""\
  ECSClusterArn:
    Description: ECS Cluster ARN
    Value: !GetAtt ECSCluster.Arn""")

        if cache:
            resources.append(self._cache_resources())
            outputs.append("""\
  CacheEndpoint:
    Description: Redis endpoint
    Value: !GetAtt CacheCluster.RedisEndpoint.Address""")

        if queue:
            resources.append(f"""\
  MessageQueue:
    Type: AWS::SQS::Queue
    Properties:
      QueueName: !Sub {name}-${{Environment}}""")
            outputs.append("""\
  QueueUrl:
    Description: SQS queue URL
    Value: !Ref MessageQueue""")

        description = quoted(f"Infrastructure for {self._facts.project_name}")
        nl2 = "\n\n"
        return f"""\
{GENERATED_HEADER}
AWSTemplateFormatVersion: '2010-09-09'
Description: {description}

Parameters:
{nl2.join(parameters)}

Conditions:
  IsProd: !Equals [!Ref Environment, {PRODUCTION_ENVIRONMENT}]

Resources:
{nl2.join(resources)}

Outputs:
{nl2.join(outputs)}
"""

    def _database_resources(self, database: str) -> str:
        port = default_port(database)
        return f"""\
  DBSubnetGroup:
    Type: AWS::RDS::DBSubnetGroup
    Properties:
      DBSubnetGroupDescription: Subnet group for RDS
      SubnetIds:
        - !Ref PrivateSubnet1
        - !Ref PrivateSubnet2

  DBSecurityGroup:
    Type: AWS::EC2::SecurityGroup
    Properties:
      GroupDescription: Security group for RDS
      VpcId: !Ref VPC
      SecurityGroupIngress:
        - IpProtocol: tcp
          FromPort: {port}
          ToPort: {port}
          CidrIp: 10.0.0.0/16

  Database:
    Type: AWS::RDS::DBInstance
    Properties:
      Engine: {cloudformation_engine(database)}
      EngineVersion: '{engine_version(database, "cloudformation")}'
      DBInstanceClass: !Ref DBInstanceClass
      AllocatedStorage: 20
      MasterUsername: !Ref DBMasterUsername
      ManageMasterUserPassword: true
      DBSubnetGroupName: !Ref DBSubnetGroup
      VPCSecurityGroups:
        - !Ref DBSecurityGroup
      MultiAZ: !If [IsProd, true, false]
      BackupRetentionPeriod: !If [IsProd, 30, 7]
      DeletionProtection: !If [IsProd, true, false]"""

    def _container_resources(self, name: str) -> str:
        return f"""\
  ECSCluster:
    Type: AWS::ECS::Cluster
    Properties:
      ClusterName: !Sub {name}-${{Environment}}

  ECSTaskExecutionRole:
    Type: AWS::IAM::Role
    Properties:
      AssumeRolePolicyDocument:
        Version: '2012-10-17'
        Statement:
          - Effect: Allow
            Principal:
              Service: ecs-tasks.amazonaws.com
            Action: sts:AssumeRole
      ManagedPolicyArns:
        - arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"""

    def _cache_resources(self) -> str:
        return f"""\
  CacheSubnetGroup:
    Type: AWS::ElastiCache::SubnetGroup
    Properties:
      Description: Subnet group for ElastiCache
      SubnetIds:
        - !Ref PrivateSubnet1
        - !Ref PrivateSubnet2

  CacheSecurityGroup:
    Type: AWS::EC2::SecurityGroup
    Properties:
      GroupDescription: Security group for Redis
      VpcId: !Ref VPC
      SecurityGroupIngress:
        - IpProtocol: tcp
          FromPort: {_REDIS_PORT}
          ToPort: {_REDIS_PORT}
          CidrIp: 10.0.0.0/16

  CacheCluster:
    Type: AWS::ElastiCache::CacheCluster
    Properties:
      Engine: redis
      CacheNodeType: cache.t3.micro
      NumCacheNodes: 1
      CacheSubnetGroupName: !Ref CacheSubnetGroup
      VpcSecurityGroupIds:
        - !GetAtt CacheSecurityGroup.GroupId"""

    def render_readme(self) -> str:
        slug = self.project_slug
        first = self._settings.environments[0] if self._settings.environments else "dev"
        return f"""\
# AWS CloudFormation Infrastructure

## Project Infrastructure

This infrastructure was generated for {self._facts.project_name} from project analysis.

Detected requirements:
{self._detected_lines()}

## Prerequisites

- AWS CLI configured
- Permissions to create VPC, RDS, ECS, and IAM resources

## Deployment Instructions

1. Create an S3 bucket for templates (if not exists):
   ```bash
   aws s3 mb s3://{slug}-cfn-templates
   ```

2. Package the template:
   ```bash
   aws cloudformation package \\
     --template-file template.yaml \\
     --s3-bucket {slug}-cfn-templates \\
     --output-template-file packaged.yaml
   ```

3. Deploy the stack:
   ```bash
   aws cloudformation deploy \\
     --template-file packaged.yaml \\
     --stack-name {slug}-{first} \\
     --parameter-overrides Environment={first} \\
     --capabilities CAPABILITY_IAM
   ```

## Environments

Deploy one stack per environment. With `Environment={PRODUCTION_ENVIRONMENT}` the
template enables multi-AZ, 30-day backup retention, and deletion protection.
"""

    def generate(self) -> list[GeneratedFile]:
        files = [
            self._file("template.yaml", self.render_template(), "CloudFormation stack template"),
            self._file("README.md", self.render_readme(), "CloudFormation deployment guide"),
        ]
        logger.info("CloudFormation: %d file(s), services=%s", len(files), self._services)
        return files
