"""
Terraform generator — multi-environment AWS topology.

Writes into the IaC directory:
    main.tf              providers, VPC, and the detected services
    <env>.tfvars         one per environment
    backend.<env>.hcl    S3 remote-state config, one per environment
    README.md            deployment guide
    .gitignore           keeps state and plans out of git

Production gets multi-AZ, 30-day backups, deletion protection and no
spot capacity; every other environment gets the cheaper settings.
"""

from __future__ import annotations

import logging

from pipegen.core.models.settings import PRODUCTION_ENVIRONMENT
from pipegen.core.models.template import GeneratedFile
from pipegen.core.services.generation import GENERATED_HEADER
from pipegen.core.services.iac.base import InfrastructureGenerator, hcl_string
from pipegen.core.services.service_detection import default_port, engine_version

logger = logging.getLogger(__name__)

_DB_INSTANCE_CLASSES = {PRODUCTION_ENVIRONMENT: "db.t3.small"}
_DEFAULT_DB_INSTANCE_CLASS = "db.t3.micro"
_REDIS_PORT = 6379

_TF_GITIGNORE = """\
# Terraform
.terraform/
*.tfstate
*.tfstate.*
*.tfplan
crash.log
.terraform.lock.hcl
"""


class TerraformGenerator(InfrastructureGenerator):
    platform_id = "terraform"

    @property
    def platform_name(self) -> str:
        return "Terraform"

    def db_instance_class(self, environment: str) -> str:
        return _DB_INSTANCE_CLASSES.get(environment, _DEFAULT_DB_INSTANCE_CLASS)

    # ── main.tf ─────────────────────────────────────────────────

    def render_template(self) -> str:
        prod = PRODUCTION_ENVIRONMENT
        database = self._services.get("database")
        sections: list[str] = []

        sections.append(f"""\
{GENERATED_HEADER}
terraform {{
  required_version = ">= 1.5.0"

  required_providers {{
    aws = {{
      source  = "hashicorp/aws"
      version = "~> 5.0"
    }}
  }}

  backend "s3" {{}}
}}""")

        envs = self._settings.environments
        env_list = ", ".join(hcl_string(e) for e in envs)
        env_description = hcl_string(f"Environment name ({', '.join(envs)})")
        region = hcl_string(self._settings.aws_region)
        sections.append(f"""\
# ── Variables ───────────────────────────────────────────────────

variable "aws_region" {{
  description = "AWS region"
  type        = string
  default     = {region}
}}

variable "environment" {{
  description = {env_description}
  type        = string

  validation {{
    condition     = contains([{env_list}], var.environment)
    error_message = "Unknown environment."
  }}
}}

variable "project_name" {{
  description = "Project name"
  type        = string
  default     = "{self.project_slug}"
}}""")

        if database:
            sections.append(f"""\
variable "db_instance_class" {{
  description = "Database instance class"
  type        = string
  default     = "{_DEFAULT_DB_INSTANCE_CLASS}"
}}""")

        sections.append(f"""\
# ── Provider ────────────────────────────────────────────────────

provider "aws" {{
  region = var.aws_region

  default_tags {{
    tags = {{
      Environment = var.environment
      Project     = var.project_name
      ManagedBy   = "terraform"
      Application = {hcl_string(self._facts.project_name)}
      Version     = {hcl_string(self._facts.package_version)}
    }}
  }}
}}

data "aws_availability_zones" "available" {{
  state = "available"
}}""")

        sections.append(f"""\
# ── Network ─────────────────────────────────────────────────────

module "vpc" {{
  source  = "terraform-aws-modules/vpc/aws"
  version = "~> 5.0"

  name            = "${{var.project_name}}-${{var.environment}}"
  cidr            = "10.0.0.0/16"
  azs             = slice(data.aws_availability_zones.available.names, 0, 2)
  private_subnets = ["10.0.1.0/24", "10.0.2.0/24"]
  public_subnets  = ["10.0.101.0/24", "10.0.102.0/24"]

  enable_nat_gateway   = true
  single_nat_gateway   = var.environment != "{prod}"
  enable_dns_hostnames = true
  enable_dns_support   = true
}}""")

        if database:
            sections.append(self._database_section(database))

        if self.needs_containers:
            sections.append(self._container_section())

        if self._services.get("cache") == "redis":
            sections.append(self._cache_section())

        if self._services.get("queue") == "sqs":
            sections.append("""\
# ── Queue ───────────────────────────────────────────────────────

resource "aws_sqs_queue" "main" {
  name = "${var.project_name}-${var.environment}"
}""")

        if self._services.get("storage") == "s3":
            sections.append("""\
# ── Storage ─────────────────────────────────────────────────────

resource "aws_s3_bucket" "main" {
  bucket = "${var.project_name}-${var.environment}-storage"
}""")

        sections.append(self._outputs_section(database))

        return "\n\n".join(sections) + "\n"

    def _database_section(self, database: str) -> str:
        prod = PRODUCTION_ENVIRONMENT
        port = default_port(database)
        return f"""\
# ── Database ────────────────────────────────────────────────────

module "rds" {{
  source  = "terraform-aws-modules/rds/aws"
  version = "~> 6.0"

  identifier        = "${{var.project_name}}-${{var.environment}}"
  engine            = "{database}"
  engine_version    = "{engine_version(database, "terraform")}"
  instance_class    = var.db_instance_class
  allocated_storage = 20
  db_name           = replace(var.project_name, "-", "_")
  username          = "app_admin"
  port              = {port}

  vpc_security_group_ids = [aws_security_group.rds.id]
  subnet_ids             = module.vpc.private_subnets
  create_db_subnet_group = true

  multi_az                = var.environment == "{prod}"
  backup_retention_period = var.environment == "{prod}" ? 30 : 7
  deletion_protection     = var.environment == "{prod}"
}}

resource "aws_security_group" "rds" {{
  name   = "${{var.project_name}}-${{var.environment}}-rds"
  vpc_id = module.vpc.vpc_id

  ingress {{
    from_port   = {port}
    to_port     = {port}
    protocol    = "tcp"
    cidr_blocks = module.vpc.private_subnets_cidr_blocks
  }}
}}"""

    def _container_section(self) -> str:
        prod = PRODUCTION_ENVIRONMENT
        return f"""\
# ── Containers ──────────────────────────────────────────────────

module "ecs" {{
  source  = "terraform-aws-modules/ecs/aws"
  version = "~> 5.0"

  cluster_name = "${{var.project_name}}-${{var.environment}}"

  cluster_configuration = {{
    execute_command_configuration = {{
      logging = "OVERRIDE"
      log_configuration = {{
        cloud_watch_log_group_name = "/aws/ecs/${{var.project_name}}"
      }}
    }}
  }}

  fargate_capacity_providers = {{
    FARGATE = {{
      default_capacity_provider_strategy = {{
        weight = 50
      }}
    }}
    FARGATE_SPOT = {{
      default_capacity_provider_strategy = {{
        weight = var.environment == "{prod}" ? 0 : 50
      }}
    }}
  }}
}}

resource "aws_iam_role" "ecs_task_execution" {{
  name = "${{var.project_name}}-${{var.environment}}-ecs-execution"

  assume_role_policy = jsonencode({{
    Version = "2012-10-17"
    Statement = [{{
      Effect    = "Allow"
      Principal = {{ Service = "ecs-tasks.amazonaws.com" }}
      Action    = "sts:AssumeRole"
    }}]
  }})
}}

resource "aws_iam_role_policy_attachment" "ecs_task_execution" {{
  role       = aws_iam_role.ecs_task_execution.name
  policy_arn = "arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
}}"""

    def _cache_section(self) -> str:
        return f"""\
# ── Cache ───────────────────────────────────────────────────────

resource "aws_security_group" "redis" {{
  name   = "${{var.project_name}}-${{var.environment}}-redis"
  vpc_id = module.vpc.vpc_id

  ingress {{
    from_port   = {_REDIS_PORT}
    to_port     = {_REDIS_PORT}
    protocol    = "tcp"
    cidr_blocks = module.vpc.private_subnets_cidr_blocks
  }}
}}

module "elasticache" {{
  source  = "terraform-aws-modules/elasticache/aws"
  version = "~> 1.0"

  cluster_id         = "${{var.project_name}}-${{var.environment}}"
  engine             = "redis"
  engine_version     = "7.0"
  node_type          = "cache.t3.micro"
  num_cache_nodes    = 1
  subnet_ids         = module.vpc.private_subnets
  security_group_ids = [aws_security_group.redis.id]
}}"""

    def _outputs_section(self, database: str | None) -> str:
        outputs = ["""\
# ── Outputs ─────────────────────────────────────────────────────

output "vpc_id" {
  value = module.vpc.vpc_id
}"""]
        if database:
            outputs.append("""\
output "database_endpoint" {
  value     = module.rds.db_instance_endpoint
  sensitive = true
}""")
        if self.needs_containers:
            outputs.append("""\
output "ecs_cluster_id" {
  value = module.ecs.cluster_id
}

output "ecs_task_execution_role_arn" {
  value = aws_iam_role.ecs_task_execution.arn
}""")
        return "\n\n".join(outputs)

    # ── Per-environment files ───────────────────────────────────

    def render_tfvars(self, environment: str) -> str:
        lines = [
            f"environment = {hcl_string(environment)}",
            f"aws_region  = {hcl_string(self._settings.aws_region)}",
        ]
        if "database" in self._services:
            lines.append(f'db_instance_class = "{self.db_instance_class(environment)}"')
        return "\n".join(lines) + "\n"

    def render_backend(self, environment: str) -> str:
        slug = self.project_slug
        state_key = hcl_string(f"{environment}/terraform.tfstate")
        return f"""\
bucket         = "{slug}-terraform-state"
key            = {state_key}
region         = {hcl_string(self._settings.aws_region)}
encrypt        = true
dynamodb_table = "{slug}-terraform-lock"
"""

    # ── README ──────────────────────────────────────────────────

    def render_readme(self) -> str:
        slug = self.project_slug
        envs = self._settings.environments
        first = envs[0] if envs else "dev"
        init_lines = "\n".join(
            f"   terraform init -reconfigure -backend-config=backend.{e}.hcl  # {e}" for e in envs
        )
        tfvars_lines = "\n".join(f"- `{e}.tfvars`: {e} settings" for e in envs)

        return f"""\
# Infrastructure as Code

## Project Infrastructure

This infrastructure was generated for {self._facts.project_name} from project analysis.

Detected requirements:
{self._detected_lines()}

## Prerequisites

- Terraform >= 1.5.0
- AWS CLI configured

## Quick Start

1. Create the S3 bucket and DynamoDB table for Terraform state:
   ```bash
   aws s3 mb s3://{slug}-terraform-state
   aws dynamodb create-table \\
     --table-name {slug}-terraform-lock \\
     --attribute-definitions AttributeName=LockID,AttributeType=S \\
     --key-schema AttributeName=LockID,KeyType=HASH \\
     --billing-mode PAY_PER_REQUEST
   ```

2. Initialize Terraform for your environment:
   ```bash
{init_lines}
   ```

3. Apply the configuration:
   ```bash
   terraform apply -var-file={first}.tfvars
   ```

## Environment-Specific Configurations

{tfvars_lines}

The `{PRODUCTION_ENVIRONMENT}` environment enables multi-AZ databases, 30-day backup
retention, deletion protection, and disables Fargate Spot capacity.
"""

    def generate(self) -> list[GeneratedFile]:
        files = [self._file("main.tf", self.render_template(), "Terraform main configuration")]

        for env in self._settings.environments:
            files.append(self._file(f"{env}.tfvars", self.render_tfvars(env), f"Variables for {env}"))
        for env in self._settings.environments:
            files.append(self._file(
                f"backend.{env}.hcl", self.render_backend(env), f"Remote state backend for {env}",
            ))

        files.append(self._file("README.md", self.render_readme(), "Terraform deployment guide"))
        files.append(self._file(".gitignore", _TF_GITIGNORE, "Terraform .gitignore"))

        logger.info("Terraform: %d file(s), services=%s", len(files), self._services)
        return files
